ADVICE_MAP = {
    "SAFE": "No action needed. Stay alert to unexpected requests for money or credentials.",
    "SUSPICIOUS": "Do not click links or reply with personal details; confirm the request through a known channel before acting.",
    "DANGEROUS": "Treat as a scam: do not respond, send money or open links; report it and delete the message.",
}


def get_advice(level):
    return ADVICE_MAP.get(level, "Verify the sender through a trusted channel before acting on this email.")


def list_advices():
    return [{"level": k, "recommendation": v} for k, v in ADVICE_MAP.items()]
