"""Sample retail products loaded into an empty collection on first run."""

from decimal import Decimal

from stockkeeper.schemas.product import ProductCategory, ProductFields

# Quantities are chosen so that four items are low on stock and the hoodie
# is out of stock entirely.
SAMPLE_PRODUCTS: tuple[ProductFields, ...] = (
    ProductFields(
        name="Classic Blue T-Shirt",
        quantity=45,
        price=Decimal("24.99"),
        category=ProductCategory.CLOTHING,
        low_stock_threshold=10,
        description="Comfortable cotton t-shirt in classic blue",
    ),
    ProductFields(
        name="Slim Fit Jeans",
        quantity=8,
        price=Decimal("59.99"),
        category=ProductCategory.CLOTHING,
        low_stock_threshold=10,
        description="Modern slim fit denim jeans",
    ),
    ProductFields(
        name="Running Shoes Pro",
        quantity=22,
        price=Decimal("89.99"),
        category=ProductCategory.FOOTWEAR,
        low_stock_threshold=8,
        description="Professional running shoes with cushioned sole",
    ),
    ProductFields(
        name="Leather Wallet",
        quantity=5,
        price=Decimal("34.99"),
        category=ProductCategory.ACCESSORIES,
        low_stock_threshold=10,
        description="Genuine leather bifold wallet",
    ),
    ProductFields(
        name="Wireless Earbuds",
        quantity=30,
        price=Decimal("79.99"),
        category=ProductCategory.ELECTRONICS,
        low_stock_threshold=15,
        description="Bluetooth 5.0 wireless earbuds with charging case",
    ),
    ProductFields(
        name="Cotton Hoodie",
        quantity=0,
        price=Decimal("44.99"),
        category=ProductCategory.CLOTHING,
        low_stock_threshold=8,
        description="Warm cotton blend hoodie",
    ),
    ProductFields(
        name="Canvas Backpack",
        quantity=18,
        price=Decimal("49.99"),
        category=ProductCategory.OTHER,
        low_stock_threshold=5,
        description="Durable canvas backpack with laptop compartment",
    ),
    ProductFields(
        name="Sports Watch",
        quantity=12,
        price=Decimal("129.99"),
        category=ProductCategory.ELECTRONICS,
        low_stock_threshold=5,
        description="Water-resistant sports watch with GPS",
    ),
    ProductFields(
        name="Yoga Mat Premium",
        quantity=25,
        price=Decimal("29.99"),
        category=ProductCategory.SPORTS_OUTDOORS,
        low_stock_threshold=10,
        description="Non-slip premium yoga mat",
    ),
    ProductFields(
        name="Sunglasses Classic",
        quantity=3,
        price=Decimal("54.99"),
        category=ProductCategory.ACCESSORIES,
        low_stock_threshold=8,
        description="UV protection classic style sunglasses",
    ),
)
