"""Default catalog of common marketplace search terms.

Used when the catalog is seeded without an explicit term list.
"""
from __future__ import annotations

from typing import Any


def _product(term: str, brand: str | None, category: str, aliases: list[str] | None = None) -> dict[str, Any]:
    metadata: dict[str, Any] = {"category": category}
    if brand:
        metadata["brand"] = brand
    if aliases:
        metadata["aliases"] = aliases
    return {"term": term, "type": "product", "metadata": metadata}


def _category(term: str, category: str, aliases: list[str] | None = None) -> dict[str, Any]:
    metadata: dict[str, Any] = {"category": category}
    if aliases:
        metadata["aliases"] = aliases
    return {"term": term, "type": "category", "metadata": metadata}


def _service(term: str) -> dict[str, Any]:
    return {"term": term, "type": "service", "metadata": {"category": "Services"}}


COMMON_SEARCH_TERMS: list[dict[str, Any]] = [
    # Smartphones
    _product("iPhone 15 Pro", "Apple", "Smartphones"),
    _product("iPhone 15", "Apple", "Smartphones"),
    _product("iPhone 14", "Apple", "Smartphones"),
    _product("Samsung Galaxy S24", "Samsung", "Smartphones"),
    _product("Samsung Galaxy S23", "Samsung", "Smartphones"),
    _product("Google Pixel 8", "Google", "Smartphones"),
    _product("Xiaomi Redmi Note", "Xiaomi", "Smartphones"),
    _product("OnePlus", "OnePlus", "Smartphones"),
    # Laptops
    _product("MacBook Pro", "Apple", "Laptops"),
    _product("MacBook Air", "Apple", "Laptops"),
    _product("Dell XPS 15", "Dell", "Laptops"),
    _product("Dell XPS 13", "Dell", "Laptops"),
    _product("HP Pavilion", "HP", "Laptops"),
    _product("Lenovo ThinkPad", "Lenovo", "Laptops"),
    _product("ASUS ROG", "ASUS", "Laptops"),
    _product("Acer Aspire", "Acer", "Laptops"),
    # Gaming
    _product("PlayStation 5", "Sony", "Gaming Consoles", ["PS5", "PlayStation V"]),
    _product("Xbox Series X", "Microsoft", "Gaming Consoles"),
    _product("Nintendo Switch", "Nintendo", "Gaming Consoles"),
    _product("Steam Deck", "Valve", "Gaming Consoles"),
    _product("RTX 4090", "NVIDIA", "Graphics Cards"),
    _product("RTX 4080", "NVIDIA", "Graphics Cards"),
    _product("GTX 3060", "NVIDIA", "Graphics Cards", ["GeForce GTX 3060"]),
    # Audio
    _product("AirPods Pro", "Apple", "Headphones"),
    _product("Sony WH-1000XM5", "Sony", "Headphones"),
    _product("Bose QuietComfort", "Bose", "Headphones"),
    _product("JBL Flip", "JBL", "Speakers"),
    # TVs
    _product("LG OLED TV", "LG", "TVs"),
    _product("Samsung QLED", "Samsung", "TVs"),
    _product("Sony Bravia", "Sony", "TVs"),
    # Shoes
    _product("Nike Air Max", "Nike", "Shoes"),
    _product("Nike Air Jordan", "Nike", "Shoes"),
    _product("Adidas Ultraboost", "Adidas", "Shoes"),
    _product("Adidas Yeezy", "Adidas", "Shoes"),
    _product("Converse Chuck Taylor", "Converse", "Shoes"),
    _product("Vans Old Skool", "Vans", "Shoes"),
    _product("New Balance 574", "New Balance", "Shoes"),
    # Clothing
    _product("Levi's Jeans", "Levi's", "Clothing"),
    _product("North Face Jacket", "The North Face", "Clothing"),
    _product("Patagonia Fleece", "Patagonia", "Clothing"),
    _product("Tommy Hilfiger", "Tommy Hilfiger", "Clothing"),
    # Accessories
    _product("Ray-Ban Sunglasses", "Ray-Ban", "Accessories"),
    _product("Oakley Sunglasses", "Oakley", "Accessories"),
    _product("Fossil Watch", "Fossil", "Watches"),
    _product("Casio Watch", "Casio", "Watches"),
    # Appliances
    _product("Dyson Vacuum", "Dyson", "Appliances"),
    _product("KitchenAid Mixer", "KitchenAid", "Appliances"),
    _product("Instant Pot", "Instant Pot", "Appliances"),
    _product("Ninja Blender", "Ninja", "Appliances"),
    _product("Vitamix Blender", "Vitamix", "Appliances"),
    # Furniture
    _product("IKEA Desk", "IKEA", "Furniture"),
    _product("IKEA Chair", "IKEA", "Furniture"),
    _product("IKEA Bookshelf", "IKEA", "Furniture"),
    # Sports & outdoors
    _product("Peloton Bike", "Peloton", "Exercise Equipment"),
    _product("Theragun Massager", "Theragun", "Sports"),
    _product("Yeti Cooler", "Yeti", "Outdoor"),
    # Categories
    _category("Electronics", "Electronics"),
    _category("Smartphones", "Electronics"),
    _category("Laptops", "Electronics"),
    _category("Gaming", "Electronics"),
    _category("Headphones", "Electronics"),
    _category("TVs", "Electronics"),
    _category("Fashion", "Fashion"),
    _category("Shoes", "Fashion"),
    _category("Clothing", "Fashion"),
    _category("Accessories", "Fashion"),
    _category("Home & Kitchen", "Home"),
    _category("Appliances", "Home"),
    _category("Furniture", "Home"),
    _category("Sports", "Sports"),
    _category("Outdoor", "Sports"),
    _category("Books", "Media"),
    _category("Toys", "Toys"),
    _category("Baby", "Baby"),
    _category("Automotive", "Automotive"),
    _category("Health & Beauty", "Health"),
    # Arabic
    _product("بطاطا حمراء", None, "Food", ["بطاطا", "بطاطس حمراء"]),
    _category("هاتف", "Electronics", ["هواتف", "جوال"]),
    _category("حاسوب", "Electronics", ["كمبيوتر", "لابتوب"]),
    _category("ملابس", "Fashion", ["لباس", "ثياب"]),
    _category("أحذية", "Fashion", ["حذاء", "جزم"]),
    _category("أثاث", "Furniture", ["اثاث منزلي"]),
    _category("إلكترونيات", "Electronics"),
    # Services
    _service("Web Design"),
    _service("Graphic Design"),
    _service("Photography"),
    _service("Plumbing"),
    _service("Electrical"),
    _service("Cleaning"),
    _service("Moving"),
    _service("Painting"),
    _service("Carpentry"),
]
