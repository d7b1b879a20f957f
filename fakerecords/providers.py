"""Value providers that Faker does not ship."""

from __future__ import annotations

from decimal import Decimal

from faker.providers import BaseProvider


class Money(Decimal):
    """A decimal amount that renders with its currency symbol."""

    def __new__(cls, value: object, symbol: str = "$") -> "Money":
        instance = super().__new__(cls, value)
        instance.symbol = symbol
        return instance

    def __str__(self) -> str:
        return f"{self.symbol}{Decimal.__str__(self)}"

    def __repr__(self) -> str:
        return f"Money('{Decimal.__str__(self)}', {self.symbol!r})"

    def __reduce__(self):
        return (type(self), (Decimal.__str__(self), self.symbol))

    def __copy__(self) -> "Money":
        return self

    def __deepcopy__(self, memo: dict) -> "Money":
        return self


class CommerceProvider(BaseProvider):
    """Product categories and product names for commerce-style fields."""

    categories = (
        "Books", "Movies", "Music", "Games", "Electronics", "Computers",
        "Home", "Garden", "Tools", "Grocery", "Health", "Beauty", "Toys",
        "Kids", "Baby", "Clothing", "Shoes", "Jewelery", "Sports",
        "Outdoors", "Automotive", "Industrial",
    )

    adjectives = (
        "Small", "Ergonomic", "Rustic", "Intelligent", "Gorgeous",
        "Incredible", "Fantastic", "Practical", "Sleek", "Awesome",
        "Generic", "Handcrafted", "Handmade", "Licensed", "Refined",
        "Unbranded", "Tasty",
    )

    materials = (
        "Steel", "Wooden", "Concrete", "Plastic", "Cotton", "Granite",
        "Rubber", "Metal", "Soft", "Fresh", "Frozen",
    )

    products = (
        "Chair", "Car", "Computer", "Keyboard", "Mouse", "Bike", "Ball",
        "Gloves", "Pants", "Shirt", "Table", "Shoes", "Hat", "Towels",
        "Soap", "Tuna", "Chicken", "Fish", "Cheese", "Bacon", "Pizza",
        "Salad", "Sausages", "Chips",
    )

    def product(self) -> str:
        return self.random_element(self.categories)

    def product_name(self) -> str:
        return " ".join(
            (
                self.random_element(self.adjectives),
                self.random_element(self.materials),
                self.random_element(self.products),
            )
        )
