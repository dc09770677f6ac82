"""
Flash messages: one-shot notices kept in the session until the next page
that displays them.
"""

from typing import Dict, List

from starlette.requests import Request

SESSION_KEY = "flash_messages"

STATUSES = ("success", "info", "warning", "danger")


class FlashMessages:

    @staticmethod
    def add_message(request: Request, message: str, status: str = "info") -> None:
        if status not in STATUSES:
            status = "info"
        queued = list(request.session.get(SESSION_KEY, []))
        queued.append({"text": message, "status": status})
        request.session[SESSION_KEY] = queued

    @staticmethod
    def get_messages(request: Request) -> List[Dict[str, str]]:
        """Return and clear the queued messages"""
        return request.session.pop(SESSION_KEY, [])
