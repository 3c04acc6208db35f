"""Upload-location override for publicly served URLs."""

import re
from dataclasses import replace
from typing import Optional

from .models import UploadDirs


def rewrite_upload_dirs(dirs: UploadDirs, override_url: Optional[str]) -> UploadDirs:
    """
    Point the host's public upload URLs at the mirror.

    The old baseurl is swapped for override_url where it prefixes url
    (case-insensitive, like the host's own URL matching), and baseurl
    becomes override_url. Local path and basedir are left alone. Without
    an override, or without both URLs present, dirs comes back as-is.
    """
    if not override_url or not dirs.url or not dirs.baseurl:
        return dirs

    new_base = override_url.rstrip("/")
    old_base = dirs.baseurl.rstrip("/")
    url = re.sub(
        "^" + re.escape(old_base),
        lambda _match: new_base,
        dirs.url,
        count=1,
        flags=re.IGNORECASE,
    )
    return replace(dirs, url=url, baseurl=new_base)
