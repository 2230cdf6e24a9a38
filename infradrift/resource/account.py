"""Account keys identify the owning AWS account or GCP project of a set of resources in
a multi-account manifest. They have the form "<cloud>:<id>", e.g. "aws:123456789012" or
"gcp:my-project"."""
import re
from typing import Literal, Optional

from pydantic import Field

from infradrift.core.base_model import BaseImmutableModel

CloudProvider = Literal["aws", "gcp"]

ACCOUNT_KEY_RE = re.compile(r"^(aws|gcp):(.+)$", re.DOTALL)
ACCOUNT_KEY_FORMAT_HELP = 'Expected format: "aws:<account-id>" or "gcp:<project-id>"'


class AccountId(BaseImmutableModel):
    """Parsed account key"""

    cloud: CloudProvider
    id: str = Field(min_length=1)

    @property
    def key(self) -> str:
        return format_account_key(self.cloud, self.id)


def is_valid_account_key(key: object) -> bool:
    return isinstance(key, str) and ACCOUNT_KEY_RE.match(key) is not None


def parse_account_key(key: object) -> Optional[AccountId]:
    """Parse an account key such as "aws:111111111111".

    Returns:
        AccountId, or None if the key is not of the form "<aws|gcp>:<non-empty id>"
    """
    if not isinstance(key, str):
        return None
    match = ACCOUNT_KEY_RE.match(key)
    if match is None:
        return None
    cloud, account_id = match.groups()
    return AccountId(cloud=cloud, id=account_id)


def format_account_key(cloud: str, account_id: str) -> str:
    return f"{cloud}:{account_id}"
