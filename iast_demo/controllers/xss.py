"""OWASP A03:2021 - Cross-Site Scripting (XSS).

Reflected, DOM-based and stored XSS plus plain HTML injection. No endpoint
here encodes its output.
"""

from flask import Blueprint, request

from iast_demo.pages import Endpoint, Section, render_section


bp = Blueprint("xss", __name__, url_prefix="/xss")

SECTION = Section(
    title="Cross-Site Scripting",
    owasp_id="A03:2021",
    url="/xss",
    endpoints=[
        Endpoint("GET", "/xss/search?query=test", "Reflected XSS"),
        Endpoint("GET", "/xss/greeting?name=John", "DOM-based XSS"),
        Endpoint("POST", "/xss/comment", "Stored XSS",
                 {"comment": "<img src=x onerror=alert(1)>"}),
        Endpoint("POST", "/xss/update-bio", "HTML injection",
                 {"bio": "<h1>Hello</h1>"}),
    ],
)


@bp.route("")
def index():
    return render_section(SECTION)


@bp.route("/search")
def search():
    """Reflected XSS.

    Example payload: <script>alert('XSS')</script>
    """
    query = request.args.get("query")
    results = f"<h2>Results for: {query}</h2>" if query is not None else ""

    # VULNERABLE: direct reflection of user input
    return f'''
    <html>
    <head><title>Search</title></head>
    <body>
    <h1>Search</h1>
    {results}
    <form action="/xss/search" method="GET">
        <input type="text" name="query" value="{query or ''}" placeholder="Search...">
        <button type="submit">Search</button>
    </form>
    <p><a href="/xss">Back</a></p>
    </body>
    </html>
    '''


@bp.route("/greeting")
def greeting():
    """DOM-based XSS.

    Example payload: '; alert('XSS'); //
    """
    name = request.args.get("name") or "Guest"

    # VULNERABLE: user input in JavaScript context
    return f'''
    <html>
    <head><title>Greeting</title></head>
    <body>
    <div id="greeting"></div>
    <script>
        var name = '{name}';
        document.getElementById('greeting').innerHTML = 'Hello, ' + name + '!';
    </script>
    <p><a href="/xss">Back</a></p>
    </body>
    </html>
    '''


@bp.route("/comment", methods=["POST"])
def comment():
    """Stored XSS simulation: the comment is echoed back as HTML."""
    text = request.form["comment"]

    # VULNERABLE: comment displayed without encoding
    return (
        "<html><body>"
        "<h2>Comment Posted:</h2>"
        f"<div>{text}</div>"
        "<p>Try: &lt;script&gt;alert('XSS')&lt;/script&gt;</p>"
        "</body></html>"
    )


@bp.route("/update-bio", methods=["POST"])
def update_bio():
    bio = request.form["bio"]

    # VULNERABLE: HTML not sanitized
    return (
        "<html><body>"
        "<h2>Profile Updated:</h2>"
        f"<div class='bio'>{bio}</div>"
        "</body></html>"
    )
