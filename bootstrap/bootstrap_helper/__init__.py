# Only the exceptions are re-exported here; they import nothing from the rest of
# the project, so core modules can depend on them without import cycles.
from ._exceptions import *  # noqa: F401,F403
from ._exceptions import __all__ as __all__  # noqa: F401
