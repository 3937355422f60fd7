"""
Product Search using pgsearch

This script demonstrates ranked web-style search over a small products
table in PostgreSQL. Point DATABASE_URL at a database you can write to.
"""

import os

from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine, desc, func, select
from sqlalchemy.dialects.postgresql import TSVECTOR

import pgsearch

metadata = MetaData()

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String, nullable=False),
    Column("description", TSVECTOR),
)

PRODUCTS = [
    ("Running Shoes", "Lightweight running shoes with a cushioned sole"),
    ("Trail Shoes", "Waterproof shoes for trail running and hiking"),
    ("Leather Belt", "Classic brown leather belt"),
    ("Running Socks", "Breathable socks for long distance running"),
]


def main():
    url = os.environ.get("DATABASE_URL", "postgresql+psycopg2://localhost/pgsearch_demo")
    engine = pgsearch.install(create_engine(url))

    print(f"Creating products table at {engine.url.render_as_string()}...")
    metadata.create_all(engine)

    with engine.begin() as conn:
        conn.execute(products.delete())
        for name, text in PRODUCTS:
            conn.execute(
                products.insert().values(
                    name=name,
                    description=func.to_tsvector("simple", f"{name} {text}"),
                )
            )
    print(f"Loaded {len(PRODUCTS)} products")

    print("\n" + "=" * 60)
    print("EXAMPLE SEARCHES")
    print("=" * 60)

    queries = [
        "shoes",
        "running -socks",
        '"leather belt"',
        "waterproof or breathable",
    ]

    with engine.connect() as conn:
        for query in queries:
            print(f"\nQuery: {query}")

            stmt = (
                select(products.c.name)
                .select_web_search_rank("description", query)
                .where_web_search("description", query)
                .order_by(desc("rank"))
                .limit(3)
            )

            rows = conn.execute(stmt).all()
            if rows:
                for i, row in enumerate(rows, 1):
                    print(f"  {i}. {row.name} (rank {row.rank:.4f})")
            else:
                print("  No results found.")

    metadata.drop_all(engine)
    engine.dispose()


if __name__ == "__main__":
    main()
