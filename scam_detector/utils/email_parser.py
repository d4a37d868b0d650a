import os
import re
from email import policy
from email.errors import HeaderParseError
from email.parser import BytesParser
from email.utils import parseaddr
import html as html_lib

SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
TAG_RE = re.compile(r"<[^>]+>")
HEADER_RE = re.compile(r"^(subject|from):[ \t]*(.*)$", re.IGNORECASE)


def strip_html(s):
    if not s:
        return ""
    x = SCRIPT_RE.sub("", s)
    x = STYLE_RE.sub("", x)
    x = x.replace("<br>", "\n").replace("<br/>", "\n").replace("</p>", "\n")
    x = TAG_RE.sub("", x)
    x = html_lib.unescape(x)
    return x


def extract_text(msg):
    parts = []
    for part in msg.walk():
        if part.is_multipart():
            continue
        ctype = part.get_content_type()
        if ctype not in ["text/plain", "text/html"]:
            continue
        try:
            content = part.get_content()
        except (LookupError, ValueError):
            payload = part.get_payload(decode=True) or b""
            content = payload.decode("utf-8", errors="ignore")
        if ctype == "text/html":
            content = strip_html(content)
        parts.append(content if isinstance(content, str) else str(content))
    return "\n".join(parts)


def sender_address(value):
    if not value:
        return ""
    addr = parseaddr(str(value))[1]
    return addr or str(value).strip()


def header_text(msg, name):
    """Decoded header value, or the raw text when the header will not parse."""
    try:
        value = msg.get(name)
        return str(value) if value is not None else ""
    except (IndexError, ValueError, HeaderParseError):
        for key, raw in msg.raw_items():
            if key.lower() == name.lower():
                return str(raw).strip()
        return ""


def parse_eml(data):
    msg = BytesParser(policy=policy.default).parsebytes(data)
    return {
        "subject": header_text(msg, "Subject"),
        "body": extract_text(msg),
        "sender": sender_address(header_text(msg, "From")),
    }


def parse_txt(data):
    """Plain text; leading ``Subject:`` / ``From:`` lines are read as headers."""
    text = data.decode("utf-8", errors="ignore")
    lines = text.splitlines()
    meta = {"subject": "", "sender": ""}
    i = 0
    while i < len(lines):
        m = HEADER_RE.match(lines[i])
        if not m:
            break
        key = "subject" if m.group(1).lower() == "subject" else "sender"
        meta[key] = m.group(2).strip()
        i += 1
    if i and i < len(lines) and not lines[i].strip():
        i += 1
    return {
        "subject": meta["subject"],
        "body": "\n".join(lines[i:]),
        "sender": sender_address(meta["sender"]),
    }


def parse_email_bytes(data, filename=""):
    ext = os.path.splitext(filename or "")[1].lower()
    if ext == ".eml":
        return parse_eml(data)
    return parse_txt(data)
