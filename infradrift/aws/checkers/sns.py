"""SNS topic checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn


class SNSChecker(AWSResourceChecker):
    service_name = "sns"
    display_name = "SNS"
    type_checkers = {"topic": "check_topic"}
    not_found_error_codes = frozenset(("NotFound", "NotFoundException"))

    def check_topic(self, parsed: ParsedArn) -> ResourceCheckResult:
        self.client(parsed).get_topic_attributes(TopicArn=parsed.raw)
        return self.result(parsed, exists=True)
