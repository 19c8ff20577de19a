"""
Configuration settings for the Lead Scoring Service
"""

import os

# =============================================================================
# LLM CONFIGURATION
# =============================================================================

_PROVIDER = os.getenv("LLM_PROVIDER", "openai")  # openai, openrouter, anthropic

_API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

LLM_CONFIG = {
    "provider": _PROVIDER,
    "model": os.getenv("LLM_MODEL", os.getenv("OPENAI_MODEL", "gpt-4o-mini")),
    "api_key": os.getenv(_API_KEY_ENV.get(_PROVIDER, "OPENAI_API_KEY"), ""),
    "base_url": os.getenv("LLM_BASE_URL", "https://openrouter.ai/api/v1"),
    "max_tokens": 200,
    "temperature": 0.2,
    "timeout": float(os.getenv("LLM_TIMEOUT", "30")),
    "max_retries": int(os.getenv("LLM_MAX_RETRIES", "0")),
    # OpenRouter specific headers
    "site_url": os.getenv("OPENROUTER_SITE_URL", "http://localhost:8000"),
    "app_name": os.getenv("OPENROUTER_APP_NAME", "Lead Scoring Service"),
}

# =============================================================================
# SERVER & LOGGING
# =============================================================================

SERVER_CONFIG = {
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", "8000")),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# =============================================================================
# RULE SCORING
# =============================================================================

# Order matters: the first keyword found in the role wins.
ROLE_KEYWORDS = {
    "decision_maker": [
        "ceo",
        "founder",
        "co-founder",
        "cto",
        "cpo",
        "chief",
        "head of",
        "vp",
        "vice president",
        "director",
        "owner",
        "partner",
        "president",
    ],
    "influencer": [
        "manager",
        "lead",
        "principal",
        "senior",
        "associate",
        "evangelist",
        "specialist",
        "coordinator",
        "marketing",
    ],
}

RULE_POINTS = {
    "decision_maker": 20,
    "influencer": 10,
    "industry_exact": 20,
    "industry_adjacent": 10,
    "complete_profile": 10,
}

MAX_RULE_SCORE = 50

# =============================================================================
# INTENT CLASSIFICATION
# =============================================================================

AI_POINTS = {
    "High": 50,
    "Medium": 30,
    "Low": 10,
}

FALLBACK_REASONS = {
    "no_api_key": "No OPENAI_API_KEY provided; defaulting to Medium.",
    "call_failed": "AI call failed ({status}).",
    "call_exception": "AI call exception, defaulting to Medium.",
}

REASON_FALLBACK_CHARS = 200

INTENT_INSTRUCTIONS = """You are an assistant that classifies a prospect's buying intent (High/Medium/Low) for a given product offer. Respond EXACTLY in this format:
Intent: <High|Medium|Low>
Reason: <One or two short sentences explaining why.>"""

# =============================================================================
# TABULAR I/O
# =============================================================================

LEAD_FIELDS = ["name", "role", "company", "industry", "location", "linkedin_bio"]

EXPORT_COLUMNS = ["name", "role", "company", "intent", "score", "reason"]

UPLOAD_EXTENSIONS = (".csv", ".txt")
