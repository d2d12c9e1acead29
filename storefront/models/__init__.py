"""ORM Models: one table per collection.

Invariants:
    - Every model imported here so Base.metadata sees every table
"""

from storefront.models.product import ProductDocument
from storefront.models.user import UserDocument

__all__ = ["ProductDocument", "UserDocument"]
