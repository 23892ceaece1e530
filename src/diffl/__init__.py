"""Root directory for diffl.

isort:skip_file

"""

# Utilities
from diffl.utils.exceptions import *
from diffl.utils.config import *
from diffl.utils.array_slice import *
from diffl.utils.dtype import *
from diffl.utils.linalg import *

# Left finite differences
from diffl.mathematics.derivatives import *
from diffl.mathematics.operators import *

# Restoration
from diffl.restoration.tv_regularizer import *
from diffl.restoration.split_bregman_tvd import *
