import uuid

from sqlalchemy import Column, Integer, String, Uuid

from referencedata.database import Base


class ProductCategory(Base):
    __tablename__ = "product_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String(50), nullable=False, unique=True, index=True)
    display_name = Column(String(255), nullable=False)
    display_order = Column(Integer, nullable=False, default=0)

    def update_from(self, other: "ProductCategory") -> None:
        """Copy display values from another category. The code never changes."""
        self.display_name = other.display_name
        self.display_order = other.display_order
