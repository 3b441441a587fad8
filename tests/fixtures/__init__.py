"""
Test fixtures for Sentiment Relay.

Contains sample inference payloads as returned by the Hugging Face router:
- hf_nested_response.json: text-classification answer wrapped in an extra list
- hf_index_labels_response.json: model using LABEL_0/1/2 labels
- hf_loading_error.json: 503 body sent while a model is loading
"""
