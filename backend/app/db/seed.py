import asyncio
from decimal import Decimal
from sqlalchemy import select
from app.db.database import db
from app.models import Product


# Sample products: (barcode, name, price, stock, description)
PRODUCTS_DATA = [
    ("4006381333931", "Ballpoint Pen", Decimal("1.49"), 120, "Blue ink, medium tip"),
    ("5000112637922", "Cola 330ml", Decimal("0.99"), 48, None),
    ("7622210449283", "Chocolate Bar", Decimal("1.79"), 60, "Milk chocolate, 100g"),
    ("8001505005592", "Espresso Beans 1kg", Decimal("18.50"), 12, "Dark roast"),
    ("4902430735063", "Toothpaste", Decimal("3.25"), 30, None),
    ("0885909950805", "USB-C Cable", Decimal("9.99"), 25, "1m braided"),
    ("9780140449136", "Paperback Novel", Decimal("12.00"), 8, None),
    ("5449000000996", "Sparkling Water 1.5l", Decimal("1.10"), 0, None),
]


async def seed_database():
    await db.connect()
    await db.create_all()

    async with db.session() as session:
        # Check if data exists
        result = await session.execute(select(Product).limit(1))
        if result.scalar():
            print("Database already seeded")
            await db.disconnect()
            return

        for barcode, name, price, stock, description in PRODUCTS_DATA:
            session.add(Product(
                barcode=barcode,
                name=name,
                price=price,
                stock=stock,
                description=description
            ))

        await session.commit()
        print("Database seeded successfully!")

    await db.disconnect()


if __name__ == "__main__":
    asyncio.run(seed_database())
