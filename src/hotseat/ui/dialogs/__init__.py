"""Modal dialogs."""

from hotseat.ui.dialogs.promotion_dialog import PromotionDialog

__all__ = ["PromotionDialog"]
