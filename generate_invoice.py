import os
import time
from contextlib import contextmanager
from typing import Callable, ContextManager, NamedTuple, Union

from playwright.sync_api import sync_playwright

from config import Settings
from errors import RenderError
from utils.log import get_logger
from utils.template import InvoiceTemplate
from utils.whatsapp import build_invoice_message, generate_whatsapp_link

logger = get_logger(__name__)

# sample literals baked into templates/bill.html
PLACEHOLDERS = {
    "customer_name": "John Doe",
    "from_location": "City A",
    "to_location": "City B",
    "date": "01/01/2024",
    "amount": "1000",
}


class InvoiceResult(NamedTuple):
    image_url: str
    whatsapp_url: str


@contextmanager
def chromium_browser(headless: bool = True):
    """Headless Chromium for a single render; closed when the block exits."""
    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=headless)
        try:
            yield browser
        finally:
            browser.close()


def format_amount(amount: Union[int, float, str]) -> str:
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


class InvoiceRenderer:
    """
    Turns invoice fields into a PNG under the public directory and returns
    the image URL plus a WhatsApp link that shares it.
    """

    def __init__(self, settings: Settings, launcher: Callable[..., ContextManager] = None):
        self.settings = settings
        self.launcher = launcher or chromium_browser

    def build_html(self, customer_name: str, from_location: str, to_location: str, date: str, amount) -> str:
        template = InvoiceTemplate.from_file(self.settings.INVOICE_TEMPLATE, PLACEHOLDERS)
        return template.render({
            "customer_name": customer_name,
            "from_location": from_location,
            "to_location": to_location,
            "date": date,
            "amount": format_amount(amount),
        })

    def image_url(self, filename: str) -> str:
        base = self.settings.PUBLIC_BASE_URL.rstrip("/")
        mount = self.settings.PUBLIC_MOUNT.strip("/")
        return f"{base}/{mount}/{filename}"

    def render_invoice(
        self,
        contact_no: str,
        customer_name: str,
        from_location: str,
        to_location: str,
        date: str,
        amount,
    ) -> InvoiceResult:
        filename = f"invoice-{time.time_ns()}.png"
        file_path = os.path.join(self.settings.PUBLIC_DIR, filename)

        try:
            html = self.build_html(customer_name, from_location, to_location, date, amount)
            os.makedirs(self.settings.PUBLIC_DIR, exist_ok=True)

            with self.launcher(headless=self.settings.BROWSER_HEADLESS) as browser:
                page = browser.new_page()
                page.set_content(html)
                page.screenshot(path=file_path, full_page=True)
        except Exception as exc:
            logger.error("invoice_render_failed", error=str(exc), error_type=type(exc).__name__)
            raise RenderError(str(exc) or type(exc).__name__) from exc

        image_url = self.image_url(filename)
        message = build_invoice_message(from_location, to_location, date, format_amount(amount), image_url)
        whatsapp_url = generate_whatsapp_link(contact_no, message)

        logger.info("invoice_rendered", file=filename)
        return InvoiceResult(image_url=image_url, whatsapp_url=whatsapp_url)
