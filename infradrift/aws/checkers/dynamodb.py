"""DynamoDB table and index checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn

INDEX_SEPARATOR = "/index/"


class DynamoDBChecker(AWSResourceChecker):
    """Tables are checked with DescribeTable, a table which is being deleted counts as
    missing. Index resource ids have the form <table>/index/<index name>; the index must
    be one of the table's global or local secondary indexes."""

    service_name = "dynamodb"
    display_name = "DynamoDB"
    type_checkers = {"table": "check_table", "index": "check_index"}
    not_found_error_codes = frozenset(("ResourceNotFoundException",))

    def _describe_table(self, parsed: ParsedArn, table_name: str) -> dict:
        return self.client(parsed).describe_table(TableName=table_name).get("Table", {})

    def check_table(self, parsed: ParsedArn) -> ResourceCheckResult:
        table = self._describe_table(parsed, parsed.resource_id)
        return self.result(parsed, exists=bool(table) and table.get("TableStatus") != "DELETING")

    def check_index(self, parsed: ParsedArn) -> ResourceCheckResult:
        table_name, _, index_name = parsed.resource_id.partition(INDEX_SEPARATOR)
        table = self._describe_table(parsed, table_name)
        index_names = {
            index.get("IndexName")
            for key in ("GlobalSecondaryIndexes", "LocalSecondaryIndexes")
            for index in table.get(key, [])
        }
        return self.result(parsed, exists=index_name in index_names)
