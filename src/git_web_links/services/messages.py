"""User-facing message text for the get-link command."""

from __future__ import annotations

from git_web_links.domain.value_objects import Uri

NO_FILE_SELECTED = "Unable to create a link because no file is selected."

GENERIC_ERROR = (
    "An error occurred while creating the link. See the log for details."
)

OPEN_IN_BROWSER = "Open in Browser"

OPEN_SETTINGS = "Open Settings"


def not_tracked_by_git(resource: Uri) -> str:
    return f"Cannot create a link for '{resource}' because it is not tracked by Git."


def no_remote(root: str) -> str:
    return (
        f"The repository '{root}' does not have a remote. "
        "Add a remote to create links to its files."
    )


def no_handler(remote_url: str) -> str:
    return (
        f"There is no handler for the remote '{remote_url}'. "
        "If it is a self-hosted server, add it to the settings."
    )


def no_remote_head(root: str, remote_name: str) -> str:
    return (
        f"Cannot find the default branch because the remote '{remote_name}' has no HEAD. "
        f"Run 'git remote set-head {remote_name} --auto' in '{root}' to fix this."
    )


def link_copied(handler_name: str) -> str:
    return f"{handler_name} link copied to the clipboard."
