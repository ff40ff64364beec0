"""Shared test fixtures for the shadcn-mcp test suite."""

from __future__ import annotations

import pytest

DIALOG_MDX = """---
title: Dialog
description: "Accessible dialog."
component: true
links:
  doc: https://www.radix-ui.com/docs/primitives/components/dialog
  api: https://www.radix-ui.com/docs/primitives/components/dialog#api-reference
---

A window overlaid on either the primary window or another dialog window.

<ComponentPreview name="dialog-demo" />

## Installation

```bash
npx shadcn@latest add dialog
```

## Usage

```tsx
import { Dialog, DialogContent } from "@/components/ui/dialog"
```

```tsx
<Dialog>
  <DialogContent>Are you sure?</DialogContent>
</Dialog>
```

## Examples

See the demo above.
"""

COMPONENTS_HTML = """
<html><body>
  <nav>
    <a href="/docs/installation">Installation</a>
    <a href="/docs/components/button">Button</a>
    <a href="/docs/components/accordion">Accordion</a>
  </nav>
  <main>
    <a href="/docs/components/button">Button</a>
    <a href="/docs/components/dialog#usage">Dialog</a>
    <a href="https://example.com/docs/components/evil">External</a>
  </main>
</body></html>
"""


def block_html(name: str, description: str, command: str | None = None) -> str:
    """Render one block element the way the block listing pages do."""
    command = command or f"npx shadcn@latest add {name}"
    return f"""
  <div id="{name}">
    <div class="flex w-full items-center gap-2 md:pr-[14px]">
      <a href="#{name}">{description}</a>
      <div class="ml-auto hidden items-center gap-2 md:flex">
        <div class="flex h-7 items-center gap-1 rounded-md border p-[2px]">
          <button><span>{command}</span></button>
        </div>
      </div>
    </div>
    <pre><code>export default function Page() {{ return null }}</code></pre>
    <div id="radix-:r1:" role="tabpanel"><code>decoy</code></div>
  </div>
"""


def blocks_page(*blocks: tuple[str, ...]) -> str:
    """Wrap (name, description[, command]) blocks in a listing page with decoys."""
    inner = "".join(block_html(*block) for block in blocks)
    return f"""
<html><body>
<div class="container-wrapper flex-1">
{inner}
  <div id="radix-:r9:"><button><span>npx shadcn@latest add decoy</span></button><code>x</code></div>
  <div id="missing-code"><button><span>npx shadcn@latest add missing-code</span></button></div>
</div>
</body></html>
"""


@pytest.fixture()
def dialog_mdx() -> str:
    return DIALOG_MDX


@pytest.fixture()
def components_html() -> str:
    return COMPONENTS_HTML


@pytest.fixture()
def sidebar_page() -> str:
    return blocks_page(
        ("sidebar-01", "A simple sidebar with navigation grouped by section."),
        ("sidebar-02", "A sidebar with collapsible sections."),
    )


@pytest.fixture()
def login_page() -> str:
    return blocks_page(("login-01", "A simple login form."))


@pytest.fixture()
def dlx_login_page() -> str:
    """A login page whose block shows a command without the npx runner."""
    return blocks_page(("login-02", "A login form.", "pnpm dlx shadcn@latest add login-02"))
