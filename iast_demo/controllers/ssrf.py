"""OWASP A10:2021 - Server-Side Request Forgery (SSRF).

The server fetches whatever URL it is given, including internal addresses
such as ``http://169.254.169.254/latest/meta-data/``. ``/parse-xml`` also
lives here because XXE is commonly used to reach the same internal targets.
"""

import logging

import requests
from flask import Blueprint, current_app, request
from lxml import etree

from iast_demo.pages import Endpoint, Section, render_section


logger = logging.getLogger(__name__)

bp = Blueprint("ssrf", __name__, url_prefix="/ssrf")

SECTION = Section(
    title="Server-Side Request Forgery",
    owasp_id="A10:2021",
    url="/ssrf",
    endpoints=[
        Endpoint("POST", "/ssrf/fetch-url", "Fetch any URL",
                 {"url": "http://example.com"}),
        Endpoint("GET", "/ssrf/proxy-image?imageUrl=http://example.com/logo.png",
                 "Image proxy (internal port scan)"),
        Endpoint("POST", "/ssrf/parse-xml", "XML parsing with external entities",
                 {"xmlContent": "<root>hello</root>"}),
        Endpoint("POST", "/ssrf/webhook", "Trigger a webhook",
                 {"webhookUrl": "http://localhost:8080/health"}),
    ],
)

XXE_EXAMPLE = (
    '<?xml version="1.0"?>\n'
    '<!DOCTYPE foo [<!ENTITY xxe SYSTEM "file:///etc/passwd">]>\n'
    "<root>&xxe;</root>"
)


def _timeout() -> int:
    return current_app.config["OUTBOUND_TIMEOUT"]


@bp.route("")
def index():
    return render_section(SECTION)


@bp.route("/fetch-url", methods=["POST"])
def fetch_url():
    """Fetch a user-supplied URL and echo the start of the body."""
    url = request.form["url"]
    preview_chars = current_app.config["FETCH_PREVIEW_CHARS"]

    try:
        # VULNERABLE: no validation of URL
        response = requests.get(url, timeout=_timeout())
    except requests.exceptions.RequestException as e:
        return f"Error fetching URL: {e}"

    return f"Fetched content from: {url}\n\n{response.text[:preview_chars]}"


@bp.route("/proxy-image")
def proxy_image():
    """Report status and content type of a user-supplied URL."""
    image_url = request.args["imageUrl"]

    try:
        # VULNERABLE: can be used to scan the internal network
        response = requests.get(image_url, timeout=_timeout())
    except requests.exceptions.RequestException as e:
        return f"Error: {e}"

    return (
        f"Image URL: {image_url}"
        f"\nResponse Code: {response.status_code}"
        f"\nContent-Type: {response.headers.get('Content-Type')}"
        "\n\nTry: http://localhost:8080/health"
        "\nOr: http://169.254.169.254/latest/meta-data/"
    )


@bp.route("/parse-xml", methods=["POST"])
def parse_xml():
    """Parse XML with DTD loading and entity resolution turned on."""
    xml_content = request.form["xmlContent"]

    try:
        # VULNERABLE: external entities resolved, network access allowed
        parser = etree.XMLParser(
            load_dtd=True,
            resolve_entities=True,
            no_network=False
        )
        root = etree.fromstring(xml_content.encode("utf-8"), parser=parser)
    except etree.XMLSyntaxError as e:
        return f"Error parsing XML: {e}"

    return (
        "XML parsed successfully!\n"
        f"Root element: {root.tag}\n"
        f"Text content: {''.join(root.itertext())}"
        f"\n\nTry XXE payload like:\n{XXE_EXAMPLE}"
    )


@bp.route("/webhook", methods=["POST"])
def webhook():
    """POST to a user-supplied URL."""
    webhook_url = request.form["webhookUrl"]

    try:
        # VULNERABLE: allows requests to internal services
        response = requests.post(webhook_url, data=b"webhook triggered", timeout=_timeout())
    except requests.exceptions.RequestException as e:
        return f"Error: {e}"

    logger.info("Webhook sent to %s (%d)", webhook_url, response.status_code)
    return f"Webhook triggered: {webhook_url}\nResponse: {response.status_code}"
