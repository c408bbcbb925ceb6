from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_PROPOSAL = """# Sample

* Proposal: [SE-0001](0001-sample.md)
* Author: [Jane Doe](https://github.com/janedoe)
* Status: **Accepted**

## Introduction

A short proposal used in tests.
"""

MULTI_AUTHOR_PROPOSAL = """# Tuple splat removal

* Proposal: [SE-0100](0100-tuple-splat.md)
* Authors: [Alice Smith](https://github.com/alice), Bob Jones, [Carol White](https://github.com/carol)
* Review Manager: [Chris Lattner](https://github.com/lattner)
* Status: **Implemented (Swift 3.0.1)**

## Introduction

Remove the implicit tuple splat behavior.
"""

HTML_PROPOSAL = """<html><body>
<h1>Add a Widget</h1>
<ul>
<li>Proposal: <a href="0042-add-widget.md">SE-0042</a></li>
<li>Authors: <a href="https://github.com/alice">Alice Smith</a>, <a href="https://github.com/bob">Bob Jones</a></li>
<li>Status: <strong>Implemented (Swift 3)</strong></li>
</ul>
<h2>Introduction</h2>
<p>Widgets everywhere.</p>
</body></html>
"""

PLAYGROUND_PAGE = """/*:
# Expanding Swift `Self` to class members and value types

* Proposal: [SE-0068](0068-universal-self.md)
* Author: [Erica Sadun](http://github.com/erica)
* Review Manager: [Chris Lattner](http://github.com/lattner)
* Status: **Accepted with revisions**
* Decision Notes: [Rationale](https://lists.swift.org/pipermail/swift-evolution/Week-of-Mon-20160425/015977.html)

## Introduction

Within a class scope, `Self` means "the dynamic class of `self`".

----------

[Previous](@previous) | [Next](@next)
*/
"""

BROKEN_PROPOSAL = """# Broken

* Proposal: [SE-0099](0099-broken.md)
* Author: Someone
* Status: **Pending Design Review**
"""


def make_proposal(
    number: str,
    *,
    title: str = "Untitled",
    status: str = "**Accepted**",
    author: str | None = "* Author: [Jane Doe](https://github.com/janedoe)",
) -> str:
    lines = [f"# {title}", "", f"* Proposal: [SE-{number}]({number}-proposal.md)"]
    if author is not None:
        lines.append(author)
    lines.append(f"* Status: {status}")
    lines.extend(["", "## Introduction", "", "Body text."])
    return "\n".join(lines) + "\n"


@pytest.fixture()
def sandbox(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    target = root / "proposals"
    target.mkdir(parents=True)
    (target / "0001-sample.md").write_text(SAMPLE_PROPOSAL, encoding="utf-8")
    (target / "0100-tuple-splat.md").write_text(MULTI_AUTHOR_PROPOSAL, encoding="utf-8")
    (target / "0042-add-widget.html").write_text(HTML_PROPOSAL, encoding="utf-8")
    (target / "0099-broken.md").write_text(BROKEN_PROPOSAL, encoding="utf-8")
    (target / "diagram.png").write_bytes(b"\x89PNG\r\n")
    page_dir = target / "SE-0068.xcplaygroundpage"
    page_dir.mkdir()
    (page_dir / "Contents.swift").write_text(PLAYGROUND_PAGE, encoding="utf-8")
    return root
