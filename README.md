# pcrkit

pcrkit models TPM 2.0 Platform Configuration Register (PCR) operations in
plain Python. It contains:

- value objects for hash algorithms, PCR indices, banks, digests and
  selections. Each one is validated when it is created.
- result types for read, event and allocate operations.
- the `Provider` and `Observer` ports, which a backend implements.
- test doubles: `MockPcrProvider`, `InMemoryPcrObserver`, `RecordingLogger`
  and `FakeTpmContext`.
- loggers that write single-line `message key=value ...` records:
  `StdioLogger`, `StdlibLogger` and `NoopLogger`.

It has no runtime dependencies.

## What it does not do

pcrkit does not talk to a TPM. It has no TCTI loader and no command
transport, and it contains no `Provider` that executes real PCR commands.
`FakeTpmContext` checks a configuration the way a real context would.
Its `create_pcr_provider()` always raises a `TpmError` with category
`RESOURCE_ERROR`, because the fake context has no backend.

## Installation

```
pip install pcrkit
```

The `test` extra adds pytest:

```
pip install "pcrkit[test]"
```

## Errors

`pcrkit.errors` defines the exception types:

- `TpmkitError` is the base class.
- `InputValidationError` is also a `ValueError`. It is raised when a value
  object gets invalid input.
- `TpmError` is raised for an expected operation failure. It carries an
  `ErrorCategory`, which is one of:
  - `INPUT_ERROR`
  - `RESOURCE_ERROR`
  - `SECURITY_FAILURE`
  - `BACKEND_ERROR`

## Value objects

```python
from pcrkit.hash_algorithm import HashAlgorithm, digest_size, hash_algorithm_name
from pcrkit.pcr import Bank, DigestValue, Index, Selection, make_index_range

digest_size(HashAlgorithm.SHA256)            # 32
hash_algorithm_name(HashAlgorithm.SHA384)    # "sha384"
Index(16) == Index.DEBUG                     # True
make_index_range(0, 3)                       # (Index(0), Index(1), Index(2))
Selection(HashAlgorithm.SHA256, [7, Index.DEBUG, 7]).indices  # (Index(7), Index(16))
Bank(HashAlgorithm.SHA512).digest_size       # 64
DigestValue(HashAlgorithm.SHA256, bytes(32))
```

Validation rules:

- An `Index` must be in the range 0 to 31.
- `Index` has named constants for the well-known registers, from
  `FIRMWARE_0` to `APPLICATION`.
- `make_index_range(first, count)` returns an empty tuple when `count` is 0.
  It raises `InputValidationError` when the range would go past index 31.
- A `DigestValue` must have exactly the digest length of its algorithm.

SHA-1 is a legacy bank algorithm and is refused by default:

- `digest_size(HashAlgorithm.SHA1)` raises `TpmkitError`.
- Creating a `Bank`, `DigestValue` or `Selection` for SHA-1 raises
  `InputValidationError`.
- Setting `pcrkit.hash_algorithm.ENABLE_LEGACY_SHA1_PCR = True` allows SHA-1.

The result types are frozen dataclasses:

- `Value`
- `ReadResult`
- `EventResult`
- `AllocateResult`

## Ports and test doubles

`pcrkit.ports.Provider` declares these operations:

- `read`
- `extend`
- `event`
- `reset`
- `allocate`
- `set_auth_value`
- `set_auth_policy`

`pcrkit.ports.Observer` declares `on_extend` and `on_event`.

`MockPcrProvider` returns programmed responses:

- Each operation raises a `BACKEND_ERROR` `TpmError` until a response is
  programmed for it.
- If the programmed response is a `TpmError`, it is raised. Any other value
  is returned.

```python
from pcrkit.doubles import MockPcrProvider
from pcrkit.errors import ErrorCategory, TpmError
from pcrkit.pcr import Index

provider = MockPcrProvider()
provider.program("reset", None)
provider.reset(Index.DEBUG)
provider.program("read", TpmError(ErrorCategory.SECURITY_FAILURE, "denied"))
provider.call_count("reset")   # 1
provider.clear_call_counts()
```

`InMemoryPcrObserver` keeps every notification as a `PcrMeasurementRecord`,
in the order they arrive:

- `entries()` returns all records.
- `entries_by_index(index)` returns the records for one index.
- `count()` returns the number of records.
- `clear()` removes them all.

## Context configuration

`pcrkit.context` covers the configuration of a TPM context:

- `StartupMode`
- `TctiStringConfig`
- `TpmContextConfig`

It also has helpers for TCTI strings in `name:args` form:

- `validate_tcti_config()` raises an `INPUT_ERROR` `TpmError` for a string
  that is empty, that has surrounding whitespace, or that has no name before
  the first colon.
- `tcti_name()` returns the part before the first colon.
- `sanitized_tcti_name()` returns the name for `device`, `mssim`, `swtpm` and
  `tabrmd`, `<custom>` for any other valid name, and `""` for a malformed
  string.

```python
from pcrkit.context import FakeTpmContext, StartupMode

ctx = FakeTpmContext.from_string("mssim:host=localhost,port=2321", StartupMode.SKIP)
ctx.last_config.tcti.config   # "mssim:host=localhost,port=2321"
```

## Logging

All loggers implement `pcrkit.logger.Logger`. Its `log(level, message, fields)`
and `flush()` methods never raise.

A field value is quoted and escaped in the record when it:

- is empty,
- contains a space, `"`, `=` or `\`, or
- contains a non-printable character.

```python
from pcrkit.logger import LogField, LogLevel
from pcrkit.stdio_logger import ColorMode, StdioLogger, StdioLoggerOptions

log = StdioLogger(StdioLoggerOptions(color=ColorMode.NEVER, min_level=LogLevel.INFO))
log.log(LogLevel.INFO, "pcr extended", [LogField("index", "16")])
# 2024-01-01T12:00:00.000Z [INFO ] pcr extended index=16
```

`StdioLogger`:

- sends `WARN` and `ERROR` records to the error stream (default
  `sys.stderr`), and every other level to the output stream (default
  `sys.stdout`).
- with `ColorMode.AUTO`, colours the level label unless `NO_COLOR` is set.
  If `FORCE_COLOR` is set it colours the label. Otherwise it colours the
  label only when the stream is the standard output or standard error and is
  a terminal.

`StdlibLogger(sink)` forwards rendered records to a `logging.Logger`.
`TRACE` maps to level 5.

`NoopLogger` discards every record.

`pcrkit.recording_logger.RecordingLogger` keeps `LogRecord` copies in memory.
It is thread-safe. Use `snapshot()` to read the records and `clear()` to
remove them.

## Running the tests

```
pytest
```