from urllib.parse import quote


def normalize_phone(phone: str) -> str:
    phone = phone.strip().replace(" ", "").replace("+", "")
    if phone.startswith("0"):
        phone = "91" + phone[1:]
    return phone


def build_invoice_message(from_location: str, to_location: str, date: str, amount: str, invoice_url: str) -> str:
    return (
        "Hello, here is your trip booking invoice:\n\n"
        f"From: {from_location}\n"
        f"To: {to_location}\n"
        f"Date: {date}\n"
        f"Amount: ₹{amount}\n"
        f"Invoice: {invoice_url}"
    )


def generate_whatsapp_link(phone: str, message: str) -> str:
    return f"https://wa.me/{normalize_phone(phone)}?text={quote(message)}"
