"""Shared test fixtures — sample diffs, records, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest

from diffgrade.detectors.registry import DetectorRegistry, build_registry


@pytest.fixture
def sample_diff_simple() -> str:
    """One changed line with trailing context."""
    return "diff --git a/f b/f\n--- a/f\n+++ b/f\n@@ -1,2 +1,2 @@\n-old\n+new\n unchanged\n"


@pytest.fixture
def golden_theme_diff() -> str:
    """Golden change dropping theme="dark" from a Toolbar."""
    return textwrap.dedent("""\
        diff --git a/src/App.tsx b/src/App.tsx
        index 1111111..2222222 100644
        --- a/src/App.tsx
        +++ b/src/App.tsx
        @@ -10,3 +10,3 @@ export const App = () => (
           <Page>
        -    <Toolbar theme="dark" id="main" />
        +    <Toolbar id="main" />
           </Page>
    """)


@pytest.fixture
def candidate_theme_correct_diff() -> str:
    return textwrap.dedent("""\
        diff --git a/src/App.tsx b/src/App.tsx
        index 1111111..3333333 100644
        --- a/src/App.tsx
        +++ b/src/App.tsx
        @@ -10,3 +10,3 @@ export const App = () => (
           <Page>
        -    <Toolbar theme="dark" id="main" />
        +    <Toolbar id="main" />
           </Page>
    """)


@pytest.fixture
def candidate_theme_readded_diff() -> str:
    """Candidate that removes theme="dark" but adds it back on another line."""
    return textwrap.dedent("""\
        diff --git a/src/App.tsx b/src/App.tsx
        index 1111111..4444444 100644
        --- a/src/App.tsx
        +++ b/src/App.tsx
        @@ -10,3 +10,4 @@ export const App = () => (
           <Page>
        -    <Toolbar theme="dark" id="main" />
        +    <Toolbar id="main" />
        +    <Masthead theme="dark" />
           </Page>
    """)


@pytest.fixture
def candidate_untouched_diff() -> str:
    """Candidate that edits the same file without touching the theme prop."""
    return textwrap.dedent("""\
        diff --git a/src/App.tsx b/src/App.tsx
        index 1111111..5555555 100644
        --- a/src/App.tsx
        +++ b/src/App.tsx
        @@ -1,2 +1,2 @@
        -import React from 'react';
        +import * as React from 'react';
         import { Page } from '@patternfly/react-core';
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    return textwrap.dedent("""\
        diff --git a/assets/logo.png b/assets/logo.png
        index 1234567..89abcde 100644
        Binary files a/assets/logo.png and b/assets/logo.png differ
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    return textwrap.dedent("""\
        diff --git a/src/OldName.tsx b/src/NewName.tsx
        similarity index 90%
        rename from src/OldName.tsx
        rename to src/NewName.tsx
        index 1234567..89abcde 100644
        --- a/src/OldName.tsx
        +++ b/src/NewName.tsx
        @@ -1,3 +1,3 @@
         import React from 'react';
        -export const OldName = () => null;
        +export const NewName = () => null;
         export default OldName;
    """)


@pytest.fixture
def sample_diff_multi() -> str:
    """Three files, one of them a new file and one a deletion."""
    return textwrap.dedent("""\
        diff --git a/src/a.ts b/src/a.ts
        index 1111111..2222222 100644
        --- a/src/a.ts
        +++ b/src/a.ts
        @@ -1,3 +1,3 @@
         const a = 1;
        -const b = 2;
        +const b = 3;
         const c = 4;
        @@ -20,2 +20,3 @@ function f() {
         return a;
        +// added
         }
        diff --git a/src/new.ts b/src/new.ts
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/src/new.ts
        @@ -0,0 +1,2 @@
        +export const x = 1;
        +export const y = 2;
        diff --git a/src/gone.ts b/src/gone.ts
        deleted file mode 100644
        index e69de29..0000000
        --- a/src/gone.ts
        +++ /dev/null
        @@ -1,1 +0,0 @@
        -export const gone = true;
    """)


@pytest.fixture
def registry() -> DetectorRegistry:
    return build_registry()


def _git(args, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)


def _make_branch_repo(root: Path, base: str, head: str) -> Path:
    """A repo with *base* committed on main and *head* committed on a feature branch."""
    root.mkdir(parents=True, exist_ok=True)
    _git(["init"], root)
    _git(["symbolic-ref", "HEAD", "refs/heads/main"], root)
    _git(["config", "user.email", "test@test.com"], root)
    _git(["config", "user.name", "Test"], root)
    src = root / "src"
    src.mkdir(exist_ok=True)
    (src / "App.tsx").write_text(base)
    _git(["add", "."], root)
    _git(["commit", "-m", "init"], root)
    _git(["checkout", "-b", "feature"], root)
    (src / "App.tsx").write_text(head)
    _git(["add", "."], root)
    _git(["commit", "-m", "change"], root)
    return root


APP_BEFORE = textwrap.dedent("""\
    import { Page, Toolbar } from '@patternfly/react-core';

    export const App = () => (
      <Page>
        <Toolbar theme="dark" id="main" />
      </Page>
    );
""")

APP_AFTER = APP_BEFORE.replace(' theme="dark"', "")


@pytest.fixture
def golden_repo(tmp_path: Path) -> Path:
    return _make_branch_repo(tmp_path / "golden", APP_BEFORE, APP_AFTER)


@pytest.fixture
def candidate_repo(tmp_path: Path) -> Path:
    return _make_branch_repo(tmp_path / "candidate", APP_BEFORE, APP_AFTER)


@pytest.fixture
def unrelated_repo(tmp_path: Path) -> Path:
    """Candidate that edits App.tsx without touching the theme prop."""
    return _make_branch_repo(tmp_path / "unrelated", APP_BEFORE, APP_BEFORE + "// tweak\n")
