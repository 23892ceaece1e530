"""Example: finite differences as matrix-free linear operator.

Checks the adjoint of the operator for all admissible boundary treatments, and
minimizes a Huber-smoothed TV regularized least squares functional by gradient
descent.

"""

import numpy as np

import diffl

shape = (16, 20)
rng = np.random.default_rng(1)

for edge in diffl.EdgeMode:
    if edge == diffl.EdgeMode.NONE:
        continue
    for add in [False, True]:
        T = diffl.diffl_map(shape, [0, 1], edge=edge, add=add, dtype=np.float64)
        print(f"edge={edge}, add={add}: dot test mismatch {diffl.adjoint_mismatch(T, rng)}")

# Gradient descent for 1/2 ||x - f||^2 + R(x)
clean = np.zeros(shape)
clean[4:12, 5:15] = 1
noisy = clean + 0.1 * rng.standard_normal(shape)

reg = diffl.TVRegularizer(shape, weight=0.05, delta=1e-2)
x = noisy.copy()
# Step size below 2 / (1 + weight * 8 / delta) for a 2d stencil
for _ in range(500):
    x -= 0.02 * (x - noisy + reg.gradient(x))

print("Error of noisy image:    ", np.linalg.norm(noisy - clean))
print("Error of regularized one:", np.linalg.norm(x - clean))
