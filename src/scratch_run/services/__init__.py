from .input_reader import InputReader, is_space
from .ordered_queue import OrderedQueue

__all__ = ["InputReader", "OrderedQueue", "is_space"]
