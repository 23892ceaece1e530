from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="diffl",
    version="0.0.1",
    description="Left finite difference operators and their adjoints for image regularization",
    keywords="finite differences adjoint linear operator total variation regularization",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=[
        "numpy",
        "scipy>=1.12",
        "scikit-image>=0.19",
    ],
    extras_require={
        "dev": [
            "pytest>=7.1",
            "black",
        ],
        "docs": [
            "sphinx",
            "pydata-sphinx-theme",
        ],
        "test": [
            "pytest>=7.1",
        ],
    },
    python_requires=">=3.11",
    platforms=["Linux", "Windows"],
    license="Apache v2",
)
