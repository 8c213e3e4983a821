"""Example usage of the comparer."""

from dataclasses import dataclass, field
from typing import Optional

from comparer import ObjectsComparer, Path, Reporter


@dataclass
class LineItem:
    sku: str
    quantity: int
    unit_price: float


@dataclass
class Customer:
    id: str
    email: str
    _session: str = ""


@dataclass
class Invoice:
    id: str
    customer: Optional[Customer] = None
    line_items: list[LineItem] = field(default_factory=list)
    tags: Optional[list[str]] = None
    updated_at: str = ""


# Invoice as returned by the legacy system
old_invoice = Invoice(
    id="INV-001",
    customer=Customer(id="C-1", email="a@example.com", _session="legacy-session"),
    line_items=[
        LineItem(sku="WIDGET-001", quantity=5, unit_price=10.00),
        LineItem(sku="GADGET-002", quantity=2, unit_price=25.50),
    ],
    tags=None,
    updated_at="2025-02-02T11:00:00Z",
)

# Same invoice as returned by the new system
new_invoice = Invoice(
    id="INV-001",
    customer=Customer(id="C-1", email="a@example.com", _session="new-session"),
    line_items=[
        LineItem(sku="GADGET-002", quantity=2, unit_price=25.50),
        LineItem(sku="WIDGET-001", quantity=5, unit_price=10.00),
    ],
    tags=[],
    updated_at="2025-02-02T11:00:07Z",
)


def by_sku(x, y):
    """Order line items by SKU, everything else naturally."""
    if isinstance(x, LineItem) and isinstance(y, LineItem):
        return x.sku < y.sku
    return x < y


class DiffPathReporter(Reporter):
    """Keeps the path of every unequal leaf."""

    def __init__(self):
        self.steps = []
        self.paths = []

    def push_step(self, step):
        self.steps.append(step)

    def report(self, result):
        if not result.equal:
            self.paths.append(str(Path(self.steps)))

    def pop_step(self):
        self.steps.pop()

    def custom_report(self):
        return "\n".join(self.paths)


def main():
    print("=" * 60)
    print("Comparer - Example")
    print("=" * 60)

    comparer = (
        ObjectsComparer()
        .with_ignore_unexported_of(Invoice)
        .with_ignore_empty_slices()
        .with_sort_slices(by_sku)
        .with_ignore_fields(Invoice, "updated_at")
    )

    print(f"\nMatch: {comparer.objects_equal(old_invoice, new_invoice)}")


def example_with_mismatch():
    """Example that demonstrates a mismatch."""
    print("\n" + "=" * 60)
    print("Example with Mismatch")
    print("=" * 60)

    reporter = DiffPathReporter()
    comparer = (
        ObjectsComparer()
        .with_ignore_unexported_of(Invoice)
        .with_custom_reporter(reporter)
    )

    print(f"\nMatch: {comparer.objects_equal(old_invoice, new_invoice)}")
    print("\nUnequal paths:")
    print(reporter.custom_report())
    print("\nDiff:")
    print(comparer.objects_diff(old_invoice, new_invoice))


if __name__ == "__main__":
    main()
    example_with_mismatch()
