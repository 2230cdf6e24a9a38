"""Secrets Manager secret checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn


class SecretsManagerChecker(AWSResourceChecker):
    service_name = "secretsmanager"
    display_name = "Secrets Manager"
    type_checkers = {"secret": "check_secret"}
    not_found_error_codes = frozenset(("ResourceNotFoundException",))

    def check_secret(self, parsed: ParsedArn) -> ResourceCheckResult:
        self.client(parsed).describe_secret(SecretId=parsed.raw)
        return self.result(parsed, exists=True)
