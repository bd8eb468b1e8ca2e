# invoicing/commands.py
"""
Command layer for invoices.

Invoices are created with totals computed by invoicing/totals.py and
stored quantized to cents. After creation only the status changes.
Creating an invoice does not post journal entries or move stock.
"""
import logging
import re
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from django.utils import timezone

from accounting.commands import CommandResult, quantize_money
from inventory.models import QTY_Q, InventoryItem
from invoicing.models import Invoice, InvoiceLine
from invoicing.totals import compute_invoice_totals, parse_amount, resolve_unit_price
from parties.models import Party
from reports.filters import parse_date


logger = logging.getLogger(__name__)

RATE_Q = Decimal("0.001")
NUMBER_RE = re.compile(r"^INV-(\d{4})-(\d+)$")


def at_stored_precision(lines: list, item_prices: dict) -> list:
    """
    Copy draft lines with quantity, price and rates rounded to the
    precision InvoiceLine stores. Totals are computed from these copies.
    """
    rounded = []
    for line in lines:
        quantity = parse_amount(line.get("quantity"))
        discount = parse_amount(line.get("discount")) or Decimal("0")
        tax_rate = parse_amount(line.get("tax_rate")) or Decimal("0")
        rounded.append({
            **line,
            "quantity": None if quantity is None else quantity.quantize(QTY_Q, rounding=ROUND_HALF_UP),
            "unit_price": quantize_money(resolve_unit_price(line, item_prices)),
            "discount": discount.quantize(RATE_Q, rounding=ROUND_HALF_UP),
            "tax_rate": tax_rate.quantize(RATE_Q, rounding=ROUND_HALF_UP),
        })
    return rounded


def next_invoice_number(year: int = None) -> str:
    """
    INV-<year>-<seq:04d>, one past the highest sequence used this year.
    """
    year = year or timezone.localdate().year
    prefix = f"INV-{year}-"
    highest = 0
    for number in Invoice.objects.filter(invoice_number__startswith=prefix).values_list(
        "invoice_number", flat=True
    ):
        match = NUMBER_RE.match(number)
        if match:
            highest = max(highest, int(match.group(2)))
    return f"{prefix}{highest + 1:04d}"


def create_invoice(
    customer_id: int,
    date,
    lines: list,
    invoice_number: str = "",
    due_date=None,
    billing_address: str = None,
    shipping_address: str = None,
    notes: str = "",
) -> CommandResult:
    """
    Create an issued invoice.

    Args:
        customer_id: Party id (required)
        date: Invoice date
        lines: dicts with inventory_item_id, description, quantity,
            unit_price, discount, tax_rate, warehouse_id
        invoice_number: defaults to next_invoice_number()
        billing_address / shipping_address: default to the customer's address

    Returns:
        CommandResult with the created Invoice or error
    """
    if not customer_id:
        return CommandResult.fail("Select a customer for the invoice.")

    if not date:
        return CommandResult.fail("Invoice date is required.")

    lines = lines or []
    if not lines:
        return CommandResult.fail("Invoice must contain at least one billable line.")

    if any(not line.get("inventory_item_id") for line in lines):
        return CommandResult.fail("Each line requires an inventory item.")

    customer = Party.objects.filter(pk=customer_id).first()
    if customer is None:
        return CommandResult.fail("Customer not found.")

    item_ids = {line["inventory_item_id"] for line in lines}
    item_prices = dict(
        InventoryItem.objects.filter(id__in=item_ids).values_list("id", "unit_price")
    )
    missing = item_ids - set(item_prices)
    if missing:
        return CommandResult.fail(f"Inventory item {sorted(missing)[0]} not found.")

    lines = at_stored_precision(lines, item_prices)
    totals = compute_invoice_totals(lines, item_prices)
    if totals.subtotal <= 0:
        return CommandResult.fail("Invoice must contain at least one billable line.")

    invoice_number = (invoice_number or "").strip() or next_invoice_number(parse_date(date).year)
    if Invoice.objects.filter(invoice_number=invoice_number).exists():
        return CommandResult.fail(f"Invoice number '{invoice_number}' already exists.")

    subtotal = quantize_money(totals.subtotal)
    tax_total = quantize_money(totals.tax_total)

    with transaction.atomic():
        invoice = Invoice.objects.create(
            invoice_number=invoice_number,
            date=date,
            due_date=due_date,
            customer_id=customer.id,
            billing_address=customer.address if billing_address is None else billing_address,
            shipping_address=customer.address if shipping_address is None else shipping_address,
            notes=notes or "",
            subtotal=subtotal,
            discount_total=quantize_money(totals.discount_total),
            tax_total=tax_total,
            total=subtotal + tax_total,
            status=Invoice.Status.ISSUED,
        )
        InvoiceLine.objects.bulk_create([
            InvoiceLine(
                invoice=invoice,
                line_no=line_no,
                inventory_item_id=lines[amounts.index]["inventory_item_id"],
                warehouse_id=lines[amounts.index].get("warehouse_id") or None,
                description=lines[amounts.index].get("description") or "",
                quantity=amounts.quantity,
                unit_price=amounts.unit_price,
                discount=amounts.discount,
                tax_rate=amounts.tax_rate,
                line_total=quantize_money(amounts.line_total),
            )
            for line_no, amounts in enumerate(totals.lines, start=1)
        ])

    logger.info(
        f"Invoice created: {invoice.invoice_number}",
        extra={
            "invoice_id": invoice.id,
            "customer_id": customer.id,
            "total": str(invoice.total),
            "skipped_lines": len(lines) - len(totals.lines),
        },
    )
    return CommandResult.ok(invoice)


def update_invoice_status(invoice_id: int, status: str) -> CommandResult:
    try:
        invoice = Invoice.objects.get(pk=invoice_id)
    except Invoice.DoesNotExist:
        return CommandResult.fail("Invoice not found.")

    if status not in Invoice.Status.values:
        return CommandResult.fail(f"Invalid status: {status}.")

    previous = invoice.status
    with transaction.atomic():
        invoice.status = status
        invoice.save(update_fields=["status", "updated_at"])

    logger.info(
        f"Invoice {invoice.invoice_number} status {previous} -> {status}",
        extra={"invoice_id": invoice.id},
    )
    return CommandResult.ok(invoice)


def delete_invoice(invoice_id: int) -> CommandResult:
    try:
        invoice = Invoice.objects.get(pk=invoice_id)
    except Invoice.DoesNotExist:
        return CommandResult.fail("Invoice not found.")

    number = invoice.invoice_number
    with transaction.atomic():
        invoice.delete()

    logger.info(f"Invoice deleted: {number}", extra={"invoice_id": invoice_id})
    return CommandResult.ok({"id": invoice_id})
