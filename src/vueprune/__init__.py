"""vueprune - dead file, dead export and unused route detection for Vue/JS projects."""

__version__ = "0.1.0"
