"""Plan and run single-page equality queries against DynamoDB tables.

A caller sends an unordered map of equality filters. The planner picks the
primary key (or the first matching single-attribute index) as the key
condition, turns everything else into a filter expression, always excludes
soft-deleted records, and the executor fetches exactly one page.
"""

from dynamo_records.handler import RequestContext, get_records

__all__ = ["RequestContext", "get_records"]
