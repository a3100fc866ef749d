from evidencemesh.query.normalizer import extract_keywords, normalize, simplify
from evidencemesh.query.reformulate import REFORMULATIONS, Reformulation, reformulations

__all__ = [
    "extract_keywords",
    "simplify",
    "normalize",
    "Reformulation",
    "REFORMULATIONS",
    "reformulations",
]
