"""
TikTok Marketing API endpoints.
Paths are relative to the production or sandbox base URL.
"""

from enum import Enum


class TikTokEndPoint(Enum):
    """TikTok Marketing API endpoint definitions."""

    # Authentication
    ACCESS_TOKEN = "oauth2/access_token/"

    # Lead subscriptions
    SUBSCRIBE = "subscription/subscribe/"
    UNSUBSCRIBE = "subscription/unsubscribe/"
    SUBSCRIPTIONS = "subscription/get/"

    # Lead forms (pages)
    PAGES = "pages/get/"

    # Test (mock) leads
    MOCK_LEAD_CREATE = "pages/leads/mock/create/"
    MOCK_LEAD_DELETE = "pages/leads/mock/delete/"
    MOCK_LEAD_GET = "pages/leads/mock/get/"

    # Lead export
    LEAD_TASK = "pages/leads/task/"
    LEAD_TASK_DOWNLOAD = "pages/leads/task/download/"
