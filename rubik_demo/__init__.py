"""Demo autónoma de un cubo Rubik 3x3x3 que se mezcla y se resuelve solo."""

__version__ = "0.1.0"
