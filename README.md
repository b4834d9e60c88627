# contestcore

The core data model of a test-orchestration service: jobs and their
descriptors, framework and test events, event queries, reporting and status
records, API event and response types, and the comparison expressions used
to decide whether a run succeeded.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

- `contestcore.comparison`: `parse_expression` turns strings such as
  `">=80%"` or `"<5"` into an `Expression` (operators `>`, `>=`, `<`, `<=`,
  `=`; absolute or percentage right hand side, see `ComparisonType`).
  `Expression.evaluate_success(success, total)` returns a `Result` with
  `passed`, `expr`, `lhs`, `rhs`, `type` and `op`. A percentage expression
  with `total == 0`, or an unparseable expression, raises `ValueError`.
  The comparators `Ge`, `Gt`, `Lt`, `Le` and `Eq` each have `compare(lhs, rhs)`.
- `contestcore.events`: the common event `Query`, job state event names
  (`EVENT_JOB_STARTED`, `JOB_COMPLETION_EVENTS`, `JOB_STATE_EVENTS`, ...),
  `validate_event_name`, `is_zero` and `apply_query_field`, which raises
  `QueryFieldZeroValueError` for a zero value and `QueryFieldAlreadySetError`
  for a field that is already set.
- `contestcore.frameworkevent`: `FrameworkEvent`, `FrameworkQuery`, the query
  builders `build_query`, `query_job_id`, `query_event_names`,
  `query_event_name`, `query_emitted_start_time`, `query_emitted_end_time`,
  and the abstract `Emitter` and `Fetcher` interfaces.
- `contestcore.testevent`: `Header`, `Data`, `TestEvent`, `TestQuery`, the
  same query builders plus `query_test_name`, `query_test_step_label` and
  `query_run_id`, and the abstract `Emitter` and `Fetcher` interfaces.
- `contestcore.config`: `parse_job_descriptor(data, job_desc_format)` checks
  a JSON or YAML job descriptor (`JobDescFormat.JSON` / `JobDescFormat.YAML`)
  and returns it as indented JSON bytes; it also holds the framework
  timeouts (`TARGET_MANAGER_TIMEOUT`, `LOCK_INITIAL_TIMEOUT`, ...).
- `contestcore.job`: `Job` (with `cancel`, `pause`, `is_cancelled`),
  `JobDescriptor`, `Reporting`, `ReporterConfig`, the abstract `Reporter`,
  `ReporterBundle`, `Report` (with `to_json`), `JobReport`, `Request` and the
  status hierarchy `RunStatus` / `TestStatus` / `TestStepStatus` /
  `TargetStatus` with their coordinates, and `Status`.
- `contestcore.api_types`: `EventType`, the event messages
  (`EventStartMsg`, `EventStatusMsg`, `EventStopMsg`, `EventRetryMsg`),
  `Event`, `EventResponse`, `ResponseType`, `Response` and the
  `ResponseData*` classes.
- `contestcore.errors`: `TargetError`, `ResumeNotSupportedError`,
  `TestStepsNeverReturnedError` and `TestStepClosedChannelsError`.

## Example

```python
from contestcore.comparison import parse_expression
from contestcore.testevent import build_query, query_job_id, query_test_name

expr = parse_expression(">=80%")
result = expr.evaluate_success(9, 10)
print(result.passed, result.expr)   # True 90.00% >= 80.00%

query = build_query(query_job_id(1), query_test_name("smoke"))
```

## What this package does not do

It holds the data model only. There is no job manager or job runner, no API
server or HTTP client, no storage backend for events, jobs or reports, no
plugins (target managers, test fetchers, test steps, reporters) and no
command-line program. `Emitter`, `Fetcher` and `Reporter` are interfaces
to be implemented elsewhere.