"""Near-expiry review page: NearExpiryController, NearExpiryView, NearExpiryModel."""

from .controller import NearExpiryController
from .model import NearExpiryModel, days_label
from .view import NearExpiryView

__all__ = [
    "NearExpiryController",
    "NearExpiryView",
    "NearExpiryModel",
    "days_label",
]
