# Export all matching models for easy imports
from .base import Base
from .plan import Plan
from .university import University

__all__ = [
    "Base",
    "Plan",
    "University",
]
