"""Cache tracker backends."""
