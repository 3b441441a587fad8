"""Unit tests for speech transcript sources."""

import pytest

from sentiment_relay.client.transcripts import IterableTranscriptSource, append_transcript


def test_append_transcript():
    assert append_transcript("", "hello") == "hello"
    assert append_transcript("I said", "hello") == "I said hello"


def test_listen_yields_one_activation():
    source = IterableTranscriptSource(lambda: ["good", "", "morning"])
    
    assert list(source.listen()) == ["good", "morning"]
    assert not source.listening


def test_each_activation_calls_factory():
    calls = []
    
    def factory():
        calls.append(1)
        return ["again"]
    
    source = IterableTranscriptSource(factory)
    list(source.listen())
    list(source.listen())
    
    assert len(calls) == 2


def test_listen_is_lazy():
    produced = []
    
    def factory():
        for word in ("one", "two", "three"):
            produced.append(word)
            yield word
    
    source = IterableTranscriptSource(factory)
    stream = source.listen()
    
    assert produced == []
    assert next(stream) == "one"
    assert produced == ["one"]
    assert source.listening


def test_stop_ends_activation():
    source = IterableTranscriptSource(lambda: iter(["one", "two", "three"]))
    stream = source.listen()
    
    assert next(stream) == "one"
    source.stop()
    
    assert list(stream) == []
    assert not source.listening


def test_cannot_listen_twice_concurrently():
    source = IterableTranscriptSource(lambda: iter(["one", "two"]))
    stream = source.listen()
    next(stream)
    
    with pytest.raises(RuntimeError):
        next(source.listen())
