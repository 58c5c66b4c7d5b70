import os

EXTRACTOR_PROVIDER = os.environ.get("EXTRACTOR_PROVIDER", "gemini")
EXTRACTOR_MODEL_VISION = os.environ.get("EXTRACTOR_MODEL_VISION", "gemini-2.5-flash")

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
ANTHROPIC_API_KEY = os.environ.get("ANTHROPIC_API_KEY", "")
OLLAMA_URL = os.environ.get("OLLAMA_URL", "http://localhost:11434")

REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "60.0"))

# Backoff starts at 1s, doubles per failure, capped at 30s
RETRY_INITIAL_DELAY_MS = int(os.environ.get("RETRY_INITIAL_DELAY_MS", "1000"))
RETRY_MAX_DELAY_MS = int(os.environ.get("RETRY_MAX_DELAY_MS", "30000"))

if RETRY_INITIAL_DELAY_MS <= 0 or RETRY_MAX_DELAY_MS < RETRY_INITIAL_DELAY_MS:
    raise RuntimeError(
        "RETRY_INITIAL_DELAY_MS must be positive and not exceed RETRY_MAX_DELAY_MS"
    )
