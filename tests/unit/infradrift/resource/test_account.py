from unittest import TestCase

from pydantic import ValidationError

from infradrift.resource.account import (
    AccountId,
    format_account_key,
    is_valid_account_key,
    parse_account_key,
)


class TestAccountKey(TestCase):
    def test_parse_aws(self):
        account_id = parse_account_key("aws:123456789012")
        self.assertEqual(account_id, AccountId(cloud="aws", id="123456789012"))
        self.assertEqual(account_id.key, "aws:123456789012")

    def test_parse_gcp(self):
        self.assertEqual(parse_account_key("gcp:my-project"), AccountId(cloud="gcp", id="my-project"))

    def test_invalid(self):
        for key in ("azure:123", "aws:", "aws", "", "123456789012", None):
            self.assertIsNone(parse_account_key(key), key)
            self.assertFalse(is_valid_account_key(key), key)

    def test_empty_id_rejected_by_model(self):
        with self.assertRaises(ValidationError):
            AccountId(cloud="aws", id="")

    def test_format(self):
        self.assertEqual(format_account_key("gcp", "proj"), "gcp:proj")
