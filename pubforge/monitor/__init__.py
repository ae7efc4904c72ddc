"""Terminal rendering of release reports."""
