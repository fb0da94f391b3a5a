from typing import List

from pricing.cart import ShoppingCart

# ============ Отчёт по корзине ============

HEADERS = ("Category", "Product", "Quantity", "Unit Price", "Total Price")
ROW_KEYS = ("category", "product", "quantity", "unit_price", "line_total")
MONEY_KEYS = ("unit_price", "line_total")


def cart_rows(cart: ShoppingCart) -> List[dict]:
    """Строки корзины, сгруппированные по названию категории"""
    return [
        {
            "category": title,
            "product": item.product.title,
            "quantity": item.quantity,
            "unit_price": item.product.price,
            "line_total": item.line_total,
        }
        for title, items in cart.grouped_items()
        for item in items
    ]


def cart_report(cart: ShoppingCart) -> dict:
    """Сводка по корзине: строки + итоговые суммы"""
    summary = cart.summary()
    return {
        "rows": cart_rows(cart),
        "total_amount": summary.total_amount,
        "total_after_discounts": summary.total_after_discounts,
        "total_discount": summary.total_discount,
        "delivery_cost": summary.delivery_cost,
        "campaign_discount": cart.get_campaign_discount(),
        "coupon_discount": cart.get_coupon_discount(),
    }


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def _format_cell(key: str, value) -> str:
    return format_amount(value) if key in MONEY_KEYS else str(value)


def render_table(rows: List[dict]) -> str:
    """Минималистичная текстовая таблица"""
    cells = [HEADERS] + [tuple(_format_cell(k, r[k]) for k in ROW_KEYS) for r in rows]
    widths = [max(len(row[i]) for row in cells) for i in range(len(HEADERS))]

    def line(row) -> str:
        return " | ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip()

    separator = "-+-".join("-" * w for w in widths)
    return "\n".join([line(cells[0]), separator] + [line(r) for r in cells[1:]])


def render_cart(cart: ShoppingCart) -> str:
    report = cart_report(cart)
    return "\n".join(
        [
            render_table(report["rows"]),
            f"Total Amount: {format_amount(report['total_amount'])}",
            f"Total Amount After Discounts: {format_amount(report['total_after_discounts'])}",
            f"Total Discount: {format_amount(report['total_discount'])}",
            f"Delivery Cost: {format_amount(report['delivery_cost'])}",
        ]
    )
