"""Lambda function and layer checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn


class LambdaChecker(AWSResourceChecker):
    service_name = "lambda"
    display_name = "Lambda"
    type_checkers = {"function": "check_function", "layer": "check_layer"}
    not_found_error_codes = frozenset(("ResourceNotFoundException",))

    def check_function(self, parsed: ParsedArn) -> ResourceCheckResult:
        self.client(parsed).get_function(FunctionName=parsed.resource_id)
        return self.result(parsed, exists=True)

    def check_layer(self, parsed: ParsedArn) -> ResourceCheckResult:
        """A layer exists while it has at least one version."""
        resp = self.client(parsed).list_layer_versions(LayerName=parsed.resource_id, MaxItems=1)
        return self.result(parsed, exists=bool(resp.get("LayerVersions")))
