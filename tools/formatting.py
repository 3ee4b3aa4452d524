# =============================================================================
# tools/formatting.py  —  Tool Result Messages
# =============================================================================
#
# Every tool answers the host with ONE text message.  The rule is the same
# for all five operations:
#   - result is None  →  a fixed failure message for that operation
#   - result present  →  a fixed template filled with the result's fields
#
# Nothing here talks to the network or knows why a request failed.
# =============================================================================

from typing import Optional

from core.models import AddResult, IpfsLink, ListResult, PinResult

UPLOAD_FAILED = "Failed to upload file to IPFS."
FETCH_FAILED = "File not found or does not exist on IPFS."
PIN_FAILED = "Failed to pin file on IPFS."
LIST_FAILED = "Failed to get file list."
REMOVE_FAILED = "Failed to remove file."


def format_upload(result: Optional[AddResult]) -> str:
    if result is None:
        return UPLOAD_FAILED
    lines = [
        "File uploaded successfully!",
        f"CID: {result.hash}",
        f"Size: {result.size} bytes",
    ]
    if result.name:
        lines.append(f"Name: {result.name}")
    return "\n".join(lines)


def format_fetch(content: Optional[str]) -> str:
    if content is None:
        return FETCH_FAILED
    return content


def format_pin(result: Optional[PinResult]) -> str:
    if result is None:
        return PIN_FAILED
    progress = result.progress if result.progress is not None else "n/a"
    return (
        "The file has been successfully pinned:\n"
        f"Pins: {', '.join(result.pins)}\n"
        f"Progress: {progress}"
    )


def format_link(link: IpfsLink) -> str:
    """Render one directory entry as a block of "Key: value" lines."""
    return "\n".join([
        f"Hash: {link.hash}",
        f"ModTime: {link.mod_time}",
        f"Mode: {link.mode}",
        f"Name: {link.name}",
        f"Size: {link.size}",
        f"Target: {link.target}",
        f"Type: {link.type}",
    ])


def format_list(result: Optional[ListResult]) -> str:
    if result is None:
        return LIST_FAILED
    links = result.links()
    if not links:
        return "File list has been successfully retrieved:\n(empty directory)"
    blocks = "\n\n".join(format_link(link) for link in links)
    return f"File list has been successfully retrieved:\n{blocks}"


def format_remove(body: Optional[str], path: str) -> str:
    if body is None:
        return REMOVE_FAILED
    if not body.strip():
        return f"File removed: {path}"
    return body
