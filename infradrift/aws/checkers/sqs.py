"""SQS queue checker."""
from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn


class SQSChecker(AWSResourceChecker):
    service_name = "sqs"
    display_name = "SQS"
    type_checkers = {"queue": "check_queue"}
    not_found_error_codes = frozenset(
        ("QueueDoesNotExist", "AWS.SimpleQueueService.NonExistentQueue")
    )

    def check_queue(self, parsed: ParsedArn) -> ResourceCheckResult:
        client = self.client(parsed)
        url_args = {"QueueName": parsed.resource_id}
        if parsed.account_id:
            url_args["QueueOwnerAWSAccountId"] = parsed.account_id
        queue_url = client.get_queue_url(**url_args)["QueueUrl"]
        client.get_queue_attributes(QueueUrl=queue_url, AttributeNames=["QueueArn"])
        return self.result(parsed, exists=True)
