"""S3 bucket checker. Objects are checked by their bucket."""
from typing import Tuple

from infradrift.aws.checkers.base import AWSResourceChecker
from infradrift.core.result import ResourceCheckResult
from infradrift.resource.arn import ParsedArn


class S3Checker(AWSResourceChecker):
    """Checks buckets with HeadBucket. S3 answers 403 rather than 404 for buckets which
    the caller can not see, so access denied is treated as not found."""

    service_name = "s3"
    display_name = "S3"
    global_service = True
    type_checkers = {"bucket": "check_bucket", "object": "check_bucket"}
    not_found_error_codes = frozenset(
        ("NoSuchBucket", "NotFound", "404", "Forbidden", "AccessDenied", "403")
    )
    not_found_http_status_codes = frozenset((403, 404))

    @staticmethod
    def bucket_name(parsed: ParsedArn) -> str:
        return parsed.resource_id.split("/", 1)[0]

    def result_key(self, parsed: ParsedArn) -> Tuple[str, str]:  # type: ignore[override]
        return "bucket", self.bucket_name(parsed)

    def check_bucket(self, parsed: ParsedArn) -> ResourceCheckResult:
        self.client(parsed).head_bucket(Bucket=self.bucket_name(parsed))
        return self.result(parsed, exists=True)
