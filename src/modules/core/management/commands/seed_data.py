from __future__ import annotations

import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import InsufficientStock
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineItemDjangoRepository,
)
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

SEED_PRODUCTS = [
    ("Whole Milk 1L", 120),
    ("Sourdough Bread", 40),
    ("Free-range Eggs (10)", 60),
    ("Bananas 1kg", 80),
    ("Espresso Beans 500g", 25),
    ("Greek Yoghurt", 50),
    ("Cheddar 200g", 35),
    ("Olive Oil 750ml", 15),
]


class Command(BaseCommand):
    help = "Seed database with demo users, products and orders."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=10)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        products = self._seed_products()
        orders_created, orders_paid = self._seed_orders(options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"products={len(products)}, "
                f"orders={orders_created}, "
                f"paid={orders_paid}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="clerk").exists():
            User.objects.create_user("clerk", password="clerk123")
            created += 1
        return created

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        for name, stock in SEED_PRODUCTS:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={"stock_quantity": stock},
            )
            products.append(product)
        return products

    def _seed_orders(self, count: int) -> tuple[int, int]:
        self.stdout.write("Placing orders...")
        products = ProductService(repository=ProductDjangoRepository()).list_products(
            {"stock_quantity__gt": 0}
        )
        if not products:
            return 0, 0
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            line_item_repository=OrderLineItemDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        created = paid = 0
        for _ in range(count):
            size = random.randint(1, min(3, len(products)))
            picks = random.sample(products, k=size)
            dto = CreateOrderDTO(
                items=[
                    CreateOrderItemDTO(
                        product_id=product.id,
                        quantity=random.randint(1, 3),
                    )
                    for product in picks
                ]
            )
            try:
                view = service.create_order(dto)
            except InsufficientStock as exc:
                self.stdout.write(self.style.WARNING(f"Skipped order: {exc}"))
                continue
            created += 1
            if random.random() < 0.5:
                service.pay_order(str(view.id))
                paid += 1
        return created, paid
