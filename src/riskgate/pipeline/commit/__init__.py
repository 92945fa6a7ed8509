"""SHA discipline: verify the checked-out commit is the expected one."""

from riskgate.pipeline.commit.verifier import VerifiedSha, read_head_sha, verify_commit

__all__ = ["VerifiedSha", "read_head_sha", "verify_commit"]
