#
# mirror.concurrent
#
from .ConcurrentMap import ConcurrentMap
from .Lock import Lock
