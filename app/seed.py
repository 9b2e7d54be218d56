#!/usr/bin/env python3
"""
Seeds the catalog with demo stores and products.

Big cities carry Electronics, Fashion and Food while small towns only carry
Tools and Food, so the market density analytics have gaps to report.

Usage: python -m app.seed
"""
import logging
import sys

from app.db.catalog_repository import CatalogRepository
from app.db.supabase_client import get_supabase_client

logger = logging.getLogger(__name__)

# (store fields, category, [(name, description, price, stock), ...])
DEMO_CATALOG = [
    (
        {"name": "Tech Haven", "description": "Electronics and gadgets", "city": "New York", "city_type": "big",
         "address": "123 Tech Street, Manhattan, NY", "phone": "+1-555-0101", "email": "contact@techhaven.com"},
        "Electronics",
        [
            ("Laptop", "High-performance laptop", 999.99, 20),
            ("Wireless Mouse", "Ergonomic wireless mouse", 29.99, 50),
            ("Headphones", "Noise-canceling headphones", 199.99, 30),
            ("USB Cable", "Fast charging USB-C cable", 15.99, 100),
            ("Webcam", "4K webcam for streaming", 89.99, 25),
            ("Keyboard", "Mechanical gaming keyboard", 129.99, 35),
        ],
    ),
    (
        {"name": "Fashion Central", "description": "Latest fashion trends", "city": "New York", "city_type": "big",
         "address": "456 Fashion Ave, Brooklyn, NY", "phone": "+1-555-0102", "email": "info@fashioncentral.com"},
        "Fashion",
        [
            ("Designer Jeans", "Premium denim jeans", 89.99, 40),
            ("Leather Jacket", "Genuine leather jacket", 299.99, 15),
            ("Sneakers", "Athletic sneakers", 79.99, 60),
            ("T-Shirt", "Cotton graphic t-shirt", 24.99, 80),
            ("Handbag", "Designer handbag", 149.99, 30),
        ],
    ),
    (
        {"name": "Metro Electronics", "description": "Consumer electronics superstore", "city": "New York",
         "city_type": "big", "address": "789 Broadway, Manhattan, NY", "phone": "+1-555-0103",
         "email": "sales@metroelectronics.com"},
        "Electronics",
        [
            ("Smartphone", "Latest smartphone model", 799.99, 50),
            ("Tablet", "10-inch tablet", 449.99, 30),
            ("Smart Watch", "Fitness tracking smartwatch", 299.99, 40),
            ("Power Bank", "20000mAh power bank", 39.99, 75),
        ],
    ),
    (
        {"name": "Gourmet Foods", "description": "Premium foods and beverages", "city": "Los Angeles",
         "city_type": "big", "address": "789 Culinary Lane, LA, CA", "phone": "+1-555-0201",
         "email": "shop@gourmetfoods.com"},
        "Food",
        [
            ("Organic Coffee", "Premium coffee beans", 18.99, 100),
            ("Olive Oil", "Extra virgin olive oil", 24.99, 80),
            ("Dark Chocolate", "Belgian dark chocolate", 12.99, 120),
            ("Wine", "California red wine", 29.99, 60),
        ],
    ),
    (
        {"name": "LA Fashion House", "description": "Trendy clothing and accessories", "city": "Los Angeles",
         "city_type": "big", "address": "234 Rodeo Drive, LA, CA", "phone": "+1-555-0202",
         "email": "info@lafashion.com"},
        "Fashion",
        [
            ("Sunglasses", "Designer sunglasses", 159.99, 50),
            ("Sandals", "Leather sandals", 49.99, 55),
            ("Belt", "Leather belt", 29.99, 60),
        ],
    ),
    (
        {"name": "Chicago Tech Store", "description": "Latest technology products", "city": "Chicago",
         "city_type": "big", "address": "567 Michigan Ave, Chicago, IL", "phone": "+1-555-0301",
         "email": "hello@chitech.com"},
        "Electronics",
        [
            ("Monitor", "27-inch 4K monitor", 399.99, 25),
            ("Router", "WiFi 6 router", 149.99, 40),
            ("External SSD", "1TB portable SSD", 119.99, 50),
            ("Printer", "Wireless printer", 179.99, 20),
        ],
    ),
    (
        {"name": "Windy City Fashion", "description": "Urban fashion boutique", "city": "Chicago",
         "city_type": "big", "address": "890 State Street, Chicago, IL", "phone": "+1-555-0302",
         "email": "shop@windycityfashion.com"},
        "Fashion",
        [
            ("Winter Coat", "Warm winter coat", 249.99, 30),
            ("Scarf", "Wool scarf", 34.99, 60),
            ("Boots", "Winter boots", 129.99, 35),
        ],
    ),
    (
        {"name": "Village Market", "description": "Local goods and essentials", "city": "Millbrook",
         "city_type": "small", "address": "88 Main Street, Millbrook, NY", "phone": "+1-555-0401",
         "email": "info@villagemarket.com"},
        "Food",
        [
            ("Fresh Bread", "Homemade bread", 4.99, 50),
            ("Local Honey", "Raw honey", 9.99, 40),
            ("Eggs", "Farm fresh eggs", 5.99, 60),
            ("Apples", "Local apples", 6.99, 100),
        ],
    ),
    (
        {"name": "Country Store", "description": "Hardware and farm supplies", "city": "Farmville",
         "city_type": "small", "address": "22 Oak Avenue, Farmville, VA", "phone": "+1-555-0501",
         "email": "info@countrystore.com"},
        "Tools",
        [
            ("Work Gloves", "Heavy-duty work gloves", 14.99, 40),
            ("Hammer", "Steel hammer", 19.99, 25),
            ("Tool Box", "Metal tool box", 39.99, 15),
            ("Tape Measure", "25-foot tape measure", 12.99, 35),
        ],
    ),
    (
        {"name": "Riverside Tools", "description": "Tools and hardware for everyone", "city": "Riverside",
         "city_type": "small", "address": "45 River Road, Riverside, IA", "phone": "+1-555-0601",
         "email": "contact@riversidetools.com"},
        "Tools",
        [
            ("Drill", "Cordless power drill", 89.99, 15),
            ("Saw", "Hand saw", 22.99, 20),
            ("Pliers", "Multi-purpose pliers", 16.99, 30),
        ],
    ),
    (
        {"name": "Small Town Grocer", "description": "Fresh food and groceries", "city": "Greenville",
         "city_type": "small", "address": "12 Main St, Greenville, SC", "phone": "+1-555-0701",
         "email": "info@smalltowngrocer.com"},
        "Food",
        [
            ("Vegetables", "Fresh vegetables", 7.99, 90),
            ("Rice", "Organic rice", 8.99, 70),
            ("Juice", "Fresh orange juice", 5.99, 60),
        ],
    ),
    (
        {"name": "Country Hardware", "description": "Hardware, tools, and supplies", "city": "Springfield",
         "city_type": "small", "address": "99 Oak Street, Springfield, MO", "phone": "+1-555-0801",
         "email": "sales@countryhardware.com"},
        "Tools",
        [
            ("Nails", "Assorted nails box", 9.99, 100),
            ("Plywood", "4x8 plywood sheet", 29.99, 25),
            ("Paint", "Interior paint gallon", 34.99, 40),
        ],
    ),
]


def seed_catalog(repository: CatalogRepository) -> int:
    """
    Replaces the whole catalog with the demo data and returns the number of products created.
    """
    repository.clear_catalog()
    logger.info("Cleared existing stores and products")

    product_count = 0
    for store_fields, category, items in DEMO_CATALOG:
        store = repository.create_store(store_fields)
        products = repository.insert_products(
            store.id,
            [
                {"name": name, "description": description, "price": price, "stock": stock, "category": category}
                for name, description, price, stock in items
            ],
        )
        product_count += len(products)
        logger.info(f"Seeded {store.name} ({store.city}) with {len(products)} {category} products")

    logger.info(f"Seeded {len(DEMO_CATALOG)} stores and {product_count} products")
    return product_count


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    try:
        seed_catalog(CatalogRepository(get_supabase_client()))
    except ValueError as e:
        logger.error(f"Cannot seed the catalog: {e}")
        sys.exit(1)
