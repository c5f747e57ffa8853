"""Package for turning news headlines into captioned meme images."""

__all__ = ["config", "models", "tools", "workflow"]
