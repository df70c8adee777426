"""
Host platform interface using Python Protocol for structural subtyping.

taxcat never owns posts or terms; it reads a post body and replaces the
post's term assignments through this interface. The only implementation
shells out to WP-CLI.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from .errors import HostPlatformError, PartialTaxonomyWriteError

logger = logging.getLogger(__name__)

TERM_FIELDS = ("term_id", "name", "slug", "taxonomy")


@runtime_checkable
class HostPlatform(Protocol):
    """Protocol for the content-management platform that owns posts and terms."""

    def get_post_content(self, post_id: int) -> str:
        """Return the raw body of a post.

        Raises:
            HostPlatformError: If the post does not exist or the call fails
        """
        ...

    def list_terms(self, post_id: int, taxonomy: str) -> List[Dict[str, Any]]:
        """Return the terms of ``taxonomy`` assigned to the post."""
        ...

    def replace_terms(self, post_id: int, taxonomy: str, names: Sequence[str]) -> None:
        """Make the post's ``taxonomy`` term set exactly equal to ``names``.

        Terms are created on first use, matched by name.

        Raises:
            PartialTaxonomyWriteError: If old terms were removed but the new
                ones could not all be added
            HostPlatformError: If the removal itself failed
        """
        ...


class WPCLIHost:
    """HostPlatform backed by the ``wp`` command-line tool.

    Args:
        wp_cli: Name or path of the WP-CLI executable
        path: WordPress root passed as ``--path`` (optional)
        url: Site URL passed as ``--url`` for multisite installs (optional)
        allow_root: Pass ``--allow-root``
    """

    def __init__(
        self,
        wp_cli: str = "wp",
        *,
        path: Optional[str] = None,
        url: Optional[str] = None,
        allow_root: bool = False,
    ):
        self.wp_cli = wp_cli
        self.global_args: List[str] = []
        if path:
            self.global_args.append(f"--path={path}")
        if url:
            self.global_args.append(f"--url={url}")
        if allow_root:
            self.global_args.append("--allow-root")

    def _run(self, *args: str) -> str:
        """Run one WP-CLI command and return its stdout."""
        cmd = [self.wp_cli, *args, *self.global_args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise HostPlatformError(f"Could not run {self.wp_cli}: {e}", command=cmd) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise HostPlatformError(
                f"'{' '.join(args[:3])}' failed (exit {result.returncode}): {stderr}",
                command=cmd,
                stderr=stderr,
            )
        return result.stdout

    def _run_json(self, *args: str) -> Any:
        out = self._run(*args)
        try:
            return json.loads(out)
        except ValueError as e:
            raise HostPlatformError(f"Unexpected output from '{' '.join(args[:3])}': {e}") from e

    def get_post_content(self, post_id: int) -> str:
        content = self._run_json("post", "get", str(post_id), "--field=post_content", "--format=json")
        if not isinstance(content, str):
            raise HostPlatformError(f"Post {post_id} content is not a string")
        return content

    def list_terms(self, post_id: int, taxonomy: str) -> List[Dict[str, Any]]:
        return self._run_json(
            "post", "term", "list", str(post_id), taxonomy,
            "--fields=" + ",".join(TERM_FIELDS), "--format=json",
        )

    def replace_terms(self, post_id: int, taxonomy: str, names: Sequence[str]) -> None:
        self._run("post", "term", "remove", str(post_id), taxonomy, "--all")
        if not names:
            logger.info("Cleared all '%s' terms on post %s", taxonomy, post_id)
            return
        try:
            self._run("post", "term", "add", str(post_id), taxonomy, *names)
        except HostPlatformError as e:
            raise PartialTaxonomyWriteError(
                f"Removed all '{taxonomy}' terms from post {post_id} but adding "
                f"{len(names)} term(s) failed: {e}",
                taxonomy=taxonomy,
                post_id=post_id,
                command=e.command,
                stderr=e.stderr,
            ) from e
        logger.info("Set %d '%s' term(s) on post %s", len(names), taxonomy, post_id)


__all__ = [
    "HostPlatform",
    "WPCLIHost",
    "TERM_FIELDS",
]
