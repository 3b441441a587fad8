"""
Sentiment Relay.

Forwards free text to a hosted sentiment-inference endpoint and turns the
heterogeneous predictions it returns into a single displayable result:
- Response normalization (nested arrays, bare objects, malformed items)
- Sentiment interpretation (top record + label classification)
- Session client with an in-memory analysis history

Architecture: FastAPI relay + Hugging Face inference router + pure core
"""

__version__ = "0.1.0"
