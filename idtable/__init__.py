from .counted import CountedM2M
from .idtable import Identified, IdTable
from .inverse import InverseTable

__all__ = [
    "CountedM2M",
    "Identified",
    "IdTable",
    "InverseTable",
]
