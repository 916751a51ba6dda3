"""HTML index pages for the demo application.

Every blueprint describes its endpoints with :class:`Endpoint`; this module
turns those descriptions into the home page and the per-category pages,
with a link for each GET endpoint and a small form for each POST endpoint.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence


@dataclass
class Endpoint:
    """One demo endpoint as shown on an index page.

    Attributes:
        method: HTTP method ("GET" or "POST").
        path: Absolute path, including any example query string.
        summary: Short description of what the endpoint demonstrates.
        fields: Form fields for POST endpoints, mapped to sample values.
    """
    method: str
    path: str
    summary: str
    fields: Dict[str, str] = field(default_factory=dict)


@dataclass
class Section:
    """A group of endpoints belonging to one blueprint."""
    title: str
    url: str
    endpoints: List[Endpoint]
    owasp_id: str = ""


PAGE_TEMPLATE = '''
<!DOCTYPE html>
<html>
<head>
    <title>{title}</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 40px; background: #f5f5f5; }}
        h1 {{ color: #d32f2f; }}
        h2 {{ color: #333; margin-top: 30px; }}
        .container {{ max-width: 900px; margin: 0 auto; background: white; padding: 30px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }}
        .warning {{ background: #ffebee; border: 2px solid #d32f2f; padding: 15px; border-radius: 4px; margin-bottom: 20px; }}
        .endpoint {{ background: #e3f2fd; padding: 10px; margin: 5px 0; border-radius: 4px; }}
        .endpoint a {{ color: #1976d2; text-decoration: none; font-weight: bold; }}
        .method {{ background: #4caf50; color: white; padding: 2px 8px; border-radius: 3px; font-size: 12px; margin-right: 10px; }}
        .method.post {{ background: #ff9800; }}
        form {{ background: #fafafa; padding: 15px; margin: 10px 0; border-radius: 4px; }}
        input {{ padding: 8px; margin: 5px; border: 1px solid #ddd; border-radius: 4px; }}
        button {{ background: #1976d2; color: white; padding: 10px 20px; border: none; border-radius: 4px; cursor: pointer; }}
    </style>
</head>
<body>
<div class="container">
    <h1>{title}</h1>
    <div class="warning">
        <strong>WARNING:</strong> This application contains intentional security vulnerabilities for testing purposes.
        DO NOT deploy in production or expose to untrusted networks!
    </div>
{body}
    <p><a href="/">Back to Home</a></p>
</div>
</body>
</html>
'''


def render_endpoint(endpoint: Endpoint) -> str:
    if endpoint.method == "GET" or not endpoint.fields:
        return (
            f'    <div class="endpoint"><span class="method">{endpoint.method}</span>'
            f'<a href="{endpoint.path}">{endpoint.path}</a> - {endpoint.summary}</div>'
        )

    inputs = "\n".join(
        f'        <input type="text" name="{name}" placeholder="{name}" value="{value}">'
        for name, value in endpoint.fields.items()
    )
    return (
        f'    <form action="{endpoint.path}" method="POST">\n'
        f'        <span class="method post">POST</span><strong>{endpoint.path}</strong>'
        f' - {endpoint.summary}<br>\n'
        f'{inputs}\n'
        f'        <button type="submit">Send</button>\n'
        f'    </form>'
    )


def render_section(section: Section) -> str:
    """Render a standalone page for one blueprint."""
    title = f"{section.owasp_id} - {section.title}" if section.owasp_id else section.title
    body = "\n".join(render_endpoint(e) for e in section.endpoints)
    return PAGE_TEMPLATE.format(title=title, body=body)


def render_home(sections: Sequence[Section]) -> str:
    """Render the home page listing every section and endpoint."""
    parts = []
    for section in sections:
        heading = f"{section.owasp_id} {section.title}".strip()
        parts.append(f'    <h2><a href="{section.url}">{heading}</a></h2>')
        parts.extend(render_endpoint(e) for e in section.endpoints)

    parts.append("    <h2>Utility Endpoints</h2>")
    parts.append(render_endpoint(Endpoint("GET", "/health", "Health check")))
    parts.append(render_endpoint(Endpoint("GET", "/reset", "Reset database")))
    return PAGE_TEMPLATE.format(title="OWASP Top 10 IAST Demo", body="\n".join(parts))
