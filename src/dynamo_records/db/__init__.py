"""DynamoDB access.

  - session  : builds the boto3 client (retry policy, timeouts, endpoint)
  - codec    : python values <-> DynamoDB wire attribute values
  - executor : runs exactly one Query page for a planned query
"""
