from __future__ import annotations

from typing import Any, Dict, List


def build_builtin_tools() -> List[Dict[str, Any]]:
    """Gemini server-side tools enabled for every call.

    Both run inside the model service, so there is nothing to execute locally:
    URL context lets the model read links the user pastes, Google Search
    grounds answers in fresh results.
    """
    return [
        {"url_context": {}},
        {"google_search": {}},
    ]
