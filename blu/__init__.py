"""blu: classify LLM responses and materialize multi-file answers onto a workspace."""

__version__ = "0.1.0"
