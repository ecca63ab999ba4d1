import pytest

from opchain.agent_ops import Extract, Lookup, Prompt, extract, lookup, prompt
from opchain.op import map
from opchain.result import Err, Ok


class MockModel:
    async def prompt(self, text):
        return f"Mock response: {text}"


class MockIndex:
    def __init__(self):
        self.queries = []

    async def top_n(self, query, n):
        self.queries.append((query, n))
        return [(1.0, "doc1", {"foo": "bar"})]


class FailingIndex:
    async def top_n(self, query, n):
        raise RuntimeError("index unavailable")


class FailingModel:
    async def prompt(self, text):
        raise RuntimeError("model unavailable")


class MockExtractor:
    async def extract(self, text):
        return {"length": len(text)}


class FailingExtractor:
    async def extract(self, text):
        raise ValueError("no data")


@pytest.mark.asyncio
async def test_lookup():
    index = MockIndex()
    op = lookup(index, 1)
    result = await op.call("query")
    assert result == Ok([(1.0, "doc1", {"foo": "bar"})])
    assert index.queries == [("query", 1)]


@pytest.mark.asyncio
async def test_lookup_error_becomes_err():
    result = await Lookup(FailingIndex(), 3).call("query")
    assert isinstance(result, Err)
    assert str(result.error) == "index unavailable"


@pytest.mark.asyncio
async def test_prompt():
    op = prompt(MockModel())
    result = await op.call("hello")
    assert result.unwrap() == "Mock response: hello"


@pytest.mark.asyncio
async def test_prompt_error_becomes_err():
    result = await Prompt(FailingModel()).call("hello")
    assert isinstance(result, Err)
    assert str(result.error) == "model unavailable"


@pytest.mark.asyncio
async def test_extract():
    op = extract(MockExtractor())
    assert await op.call("abcd") == Ok({"length": 4})


@pytest.mark.asyncio
async def test_extract_error_becomes_err():
    result = await Extract(FailingExtractor()).call("abcd")
    assert isinstance(result, Err)
    assert isinstance(result.error, ValueError)
    assert str(result.error) == "no data"


@pytest.mark.asyncio
async def test_op_prompt_method():
    pipeline = map(lambda q: f"User query: {q}").prompt(MockModel())
    result = await pipeline.try_call("What is a flurbo?")
    assert result == Ok("Mock response: User query: What is a flurbo?")


@pytest.mark.asyncio
async def test_op_lookup_method_with_map_ok():
    pipeline = (
        map(lambda q: q.upper())
        .lookup(MockIndex(), 1)
        .map_ok(lambda docs: f"Top documents:\n{docs[0][2]['foo']}")
    )
    assert await pipeline.try_call("query") == Ok("Top documents:\nbar")