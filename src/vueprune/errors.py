"""Exception types raised by vueprune."""


class VuePruneError(Exception):
    """Base class for errors that abort an analysis run."""


class ConfigError(VuePruneError):
    """Invalid configuration, missing project directory or missing custom entry."""


class AnalysisError(VuePruneError):
    """The source corpus could not be captured completely.

    A partial graph would classify live files as dead, so any failure while
    reading the corpus aborts the whole run.
    """
