from unittest import TestCase

from infradrift.core.result import InfraScanSummary, ResourceCheckResult


def make_result(arn: str, exists: bool, error=None) -> ResourceCheckResult:
    return ResourceCheckResult(
        arn=arn, exists=exists, error=error, service="s3", resource_type="bucket", resource_id=arn
    )


class TestResourceCheckResult(TestCase):
    def test_states(self):
        found = make_result("a", True)
        missing = make_result("b", False)
        errored = make_result("c", False, "AccessDenied")
        self.assertFalse(found.is_missing or found.is_error)
        self.assertTrue(missing.is_missing)
        self.assertFalse(missing.is_error)
        self.assertTrue(errored.is_error)
        self.assertFalse(errored.is_missing)


class TestInfraScanSummary(TestCase):
    def test_from_results(self):
        results = [
            make_result("a", True),
            make_result("b", False),
            make_result("c", False, "timeout"),
            make_result("d", True, "odd"),
            make_result("e", True),
        ]
        self.assertEqual(
            InfraScanSummary.from_results(results),
            InfraScanSummary(total=5, found=2, missing=1, errors=2),
        )

    def test_empty(self):
        self.assertEqual(
            InfraScanSummary.from_results([]),
            InfraScanSummary(total=0, found=0, missing=0, errors=0),
        )
