"""Mock listing catalog"""

from decimal import Decimal
from typing import Optional

from ..models.product import Product, ProductCategory

# Mock marketplace listings across four sellers
PRODUCTS: dict[str, Product] = {
    "lst-001": Product(
        id="lst-001",
        title="Hand-thrown Stoneware Mug",
        description="12 oz wheel-thrown mug with a speckled oatmeal glaze. Dishwasher safe.",
        price=Decimal("28.00"),
        category=ProductCategory.HOME,
        seller_id="seller-001",
        image_url="/static/images/stoneware-mug.jpg",
        weight_oz=14,
        stock_quantity=40,
    ),
    "lst-002": Product(
        id="lst-002",
        title="Walnut Serving Board",
        description="Solid black walnut board finished with food-safe oil and beeswax.",
        price=Decimal("64.50"),
        category=ProductCategory.HOME,
        seller_id="seller-001",
        image_url="/static/images/walnut-board.jpg",
        weight_oz=38,
        stock_quantity=15,
    ),
    "lst-003": Product(
        id="lst-003",
        title="Botanical Linocut Print",
        description="Signed 8x10 linocut print of wild ferns on cotton rag paper.",
        price=Decimal("35.00"),
        category=ProductCategory.ART,
        seller_id="seller-002",
        image_url="/static/images/fern-print.jpg",
        weight_oz=6,
        stock_quantity=25,
    ),
    "lst-004": Product(
        id="lst-004",
        title="Watercolor Coastline Original",
        description="Original 11x14 watercolor painting of the Big Sur coastline.",
        price=Decimal("220.00"),
        category=ProductCategory.ART,
        seller_id="seller-002",
        image_url="/static/images/coastline-watercolor.jpg",
        weight_oz=20,
        stock_quantity=1,
    ),
    "lst-005": Product(
        id="lst-005",
        title="Merino Wool Beanie",
        description="Hand-knit ribbed beanie in undyed merino wool. One size.",
        price=Decimal("42.00"),
        category=ProductCategory.CLOTHING,
        seller_id="seller-003",
        image_url="/static/images/merino-beanie.jpg",
        weight_oz=4,
        stock_quantity=30,
    ),
    "lst-006": Product(
        id="lst-006",
        title="Sterling Silver Leaf Earrings",
        description="Hammered sterling silver leaf drops on hypoallergenic hooks.",
        price=Decimal("48.00"),
        category=ProductCategory.JEWELRY,
        seller_id="seller-003",
        image_url="/static/images/leaf-earrings.jpg",
        weight_oz=1,
        stock_quantity=50,
    ),
    "lst-007": Product(
        id="lst-007",
        title="Vintage Field Guide to Mushrooms",
        description="1962 hardcover field guide with color plates. Light shelf wear.",
        price=Decimal("18.75"),
        category=ProductCategory.BOOKS,
        seller_id="seller-004",
        image_url="/static/images/mushroom-guide.jpg",
        stock_quantity=3,
    ),
    "lst-008": Product(
        id="lst-008",
        title="Letterpress Recipe Cards (Set of 12)",
        description="Cotton stock recipe cards printed on a 1920s Chandler & Price press.",
        price=Decimal("15.50"),
        category=ProductCategory.BOOKS,
        seller_id="seller-004",
        image_url="/static/images/recipe-cards.jpg",
        weight_oz=5,
        stock_quantity=120,
    ),
}


class ProductDatabase:
    """In-memory listing catalog"""

    def __init__(self, products: Optional[dict[str, Product]] = None):
        source = PRODUCTS if products is None else products
        self.products = {pid: p.model_copy() for pid, p in source.items()}

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a listing by ID"""
        return self.products.get(product_id)

    def search_products(
        self,
        query: Optional[str] = None,
        category: Optional[ProductCategory] = None,
        seller_id: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        in_stock_only: bool = True,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """
        Search listings with filters.

        Returns:
            Tuple of (matching listings, total count)
        """
        results = list(self.products.values())

        if query:
            query_lower = query.lower()
            results = [
                p for p in results
                if query_lower in p.title.lower() or query_lower in p.description.lower()
            ]

        if category:
            results = [p for p in results if p.category == category]

        if seller_id:
            results = [p for p in results if p.seller_id == seller_id]

        if min_price is not None:
            results = [p for p in results if p.price >= min_price]
        if max_price is not None:
            results = [p for p in results if p.price <= max_price]

        if in_stock_only:
            results = [p for p in results if p.in_stock and p.stock_quantity > 0]

        total = len(results)
        results = results[offset : offset + limit]

        return results, total

    def update_stock(self, product_id: str, quantity_change: int) -> bool:
        """
        Update listing stock.

        Args:
            product_id: Listing to update
            quantity_change: Positive to add, negative to remove

        Returns:
            True if successful
        """
        product = self.products.get(product_id)
        if not product:
            return False

        new_quantity = product.stock_quantity + quantity_change
        if new_quantity < 0:
            return False

        product.stock_quantity = new_quantity
        product.in_stock = new_quantity > 0
        return True
