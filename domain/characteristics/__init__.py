"""
Characteristic tree and the debt model aggregate.

Characteristics own their children and requirements; a child refers back to
its parent by key, resolved through DebtModel.
"""

from domain.characteristics.model import Characteristic, DebtModel

__all__ = [
    "Characteristic",
    "DebtModel",
]
