# opchain

Small building blocks for asynchronous pipelines. A pipeline is a chain of
operations ("ops"); each op is awaited with one input and produces one
output. Ops can be joined in sequence, run side by side on the same input,
or continued on success and failure values.

## Installing

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Sequential ops

Every op is a subclass of `opchain.op.Op` and implements `async call(input)`.

```python
import asyncio
from opchain.builder import new

pipeline = (
    new()
    .map(lambda pair: pair[0] + pair[1])
    .map(lambda z: f"Result: {z}!")
)

print(asyncio.run(pipeline.call((1, 2))))  # Result: 3!
```

- `map(f)` feeds the output through a plain function, `then(f)` through an
  async function, and `chain(op)` into any other `Op`; each returns a
  `Sequential`.
- The standalone constructors `opchain.op.map`, `opchain.op.then` and
  `opchain.op.passthrough` build an op without a builder.
- `batch_call(n, inputs)` runs the op on every input with at most `n` in
  flight and returns the outputs in input order. `n` below 1 raises
  `ValueError`.

`opchain.builder.new()` returns a `PipelineBuilder`; `with_error(error_type)`
returns one that records a different error type. The builder's `map`,
`then`, `chain`, `lookup`, `prompt` and `extract` methods each return the
first op of the pipeline.

## Parallel ops

```python
from opchain.op import map, passthrough
from opchain.parallel import parallel

op = parallel(passthrough(), map(lambda x: x * 2), map(lambda x: x == 1))
# await op.call(1) -> (1, 2, True)
```

`Parallel(op1, op2)` runs two ops concurrently on the same input and returns
a pair. `parallel(*ops)` takes two or more ops (fewer raise `ValueError`)
and returns a flat tuple of their outputs.

## Fallible ops

An op is fallible when its output is an `Ok(value)` or an `Err(error)` from
`opchain.result`. `Ok.unwrap()` returns the value; `Err.unwrap()` raises
`TryCallError`, whose `error` attribute holds the error value.

```python
from opchain.op import map
from opchain.result import Err, Ok

op = map(lambda x: Ok(x) if x % 2 == 0 else Err("x is odd")).map_ok(lambda x: x * 2)
# await op.try_call(2) -> Ok(4)
# await op.try_call(1) -> Err("x is odd")
```

- `try_call(input)` returns the op's `Ok` or `Err`, and raises `TypeError`
  if the op produced anything else.
- `try_batch_call(n, inputs)` returns `Ok` with all success values in input
  order, or the first `Err` in input order, cancelling the remaining work.
- `map_ok(f)` and `map_err(f)` transform the success or the error value with
  a plain function.
- `and_then(f)` continues on success, and `or_else(f)` recovers on failure,
  with an async function that itself returns `Ok` or `Err`.
- `chain_ok(op)` feeds the success value into another op and wraps its
  output in `Ok`.

The combinator classes (`MapOk`, `MapErr`, `AndThen`, `OrElse`,
`TrySequential`) live in `opchain.try_op`.

`try_parallel(*ops)` runs fallible ops concurrently and returns `Ok` of a
flat tuple, or the first `Err` to arrive, cancelling the others.

## Agent ops

`opchain.agent_ops` adapts objects you provide into ops:

- `lookup(index, n)` calls `await index.top_n(str(input), n)` and returns
  `Ok` with the list of results.
- `prompt(model)` calls `await model.prompt(str(input))` and returns `Ok`
  with the response.
- `extract(extractor)` calls `await extractor.extract(str(input))` and
  returns `Ok` with the data.

An exception raised by the wrapped object is returned as `Err(exception)`.
Every op also offers `.lookup(index, n)` and `.prompt(model)` to append
these steps.

`opchain.builder.ChainError(stage, error)` describes a failed pipeline stage;
`stage` is `"prompt"` or `"lookup"`, and any other value raises `ValueError`.

## OneOrMany

`opchain.one_or_many.OneOrMany` is a sequence that is never empty:

- `OneOrMany.one(item)` holds a single item.
- `OneOrMany.many(items)` raises `EmptyListError` when `items` is empty.
- `OneOrMany.merge(groups)` concatenates several instances, raising
  `EmptyListError` when given none.

Instances support `first()`, `rest()` (a copy), `push(item)`, `len()`,
iteration and equality.

## What it does not do

The package contains no model clients, vector stores, embedding code or
extractors. The agent ops only call the `top_n`, `prompt` and `extract`
methods of objects you supply.