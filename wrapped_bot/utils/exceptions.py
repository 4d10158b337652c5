"""
Custom exceptions for the Wrapped bot with user-friendly error messages.
"""

class WrappedException(Exception):
    """Base exception for Wrapped errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class DatasetError(WrappedException):
    """Raised when the precomputed dataset cannot be loaded or parsed."""
    def __init__(self, details: str):
        super().__init__(
            f"Invalid wrapped dataset: {details}",
            "❌ The Wrapped data is unavailable right now."
        )

class MemberNotFoundError(WrappedException):
    """Raised when no member matches a name or slug."""
    def __init__(self, name: str):
        super().__init__(
            f"Member '{name}' not found",
            f"❌ No Wrapped found for '{name}'."
        )

class CaptureError(WrappedException):
    """Raised when a card could not be rendered to an image."""
    def __init__(self, card_element_id: str, reason: str):
        super().__init__(
            f"Capture of {card_element_id} failed: {reason}",
            "❌ Couldn't create the share image. Please try again."
        )

class ShareHandoffError(WrappedException):
    """Raised when the image could not be handed to any share mechanism."""
    def __init__(self, reason: str):
        super().__init__(
            f"Share handoff failed: {reason}",
            "❌ Couldn't share the card. Please try again."
        )
