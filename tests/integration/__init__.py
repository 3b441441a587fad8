"""
Integration tests for Sentiment Relay.

Exercise the assembled FastAPI app end to end with TestClient, with the
inference router replaced by an httpx.MockTransport.
"""
