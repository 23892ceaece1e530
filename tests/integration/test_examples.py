import os
import sys
from pathlib import Path

import pytest


def test_tv_denoising():
    assert not (
        os.system(
            f'{sys.executable} {str(Path(f"{os.path.dirname(__file__)}/../../examples/tv_denoising.py"))}'
        )
    )


def test_operator_adjoint():
    assert not (
        os.system(
            f'{sys.executable} {str(Path(f"{os.path.dirname(__file__)}/../../examples/operator_adjoint.py"))}'
        )
    )
