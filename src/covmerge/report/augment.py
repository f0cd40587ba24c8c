"""Cosmetic additions to the ``go tool cover`` HTML report.

Adds a file search box above the file selector and line numbers to every
source listing. Applying it twice is a no-op.
"""

from __future__ import annotations

import re
from pathlib import Path

from covmerge.core.errors import OutputError
from covmerge.core.logging import get_logger

log = get_logger("report")

ADDITION_HTML = """
    <style>
        .line-number {
            display: inline-block;
            width: 30px;
            text-align: right;
            margin-right: 10px;
            color: #888;
        }
    </style>
    <script>
    let optionMap = new Map();

    function initFilter() {
        var fileSelect = document.getElementById('files');
        var options = fileSelect.getElementsByTagName('option');

        for (var i = 0; i < options.length; i++) {
            optionMap.set(options[i].value, options[i]);
        }
    }

    function filterFiles() {
        var input = document.getElementById('fileSearch');
        var filter = input.value.trim().toUpperCase();
        var visibleOptions = [];

        optionMap.forEach((option, value) => {
            const optionText = option.innerText.toUpperCase();
            if (filter === '' || optionText.indexOf(filter) !== -1) {
                visibleOptions.push(option);
            } else {
                option.style.display = 'none';
            }
        });

        for (let option of visibleOptions) {
            option.style.display = '';
        }
    }

    function addLineNumbers() {
      const preElements = document.querySelectorAll('pre');
      preElements.forEach(pre => {
          const lines = pre.innerHTML.split('\\n');
          const lineNumberedHtml = lines.map((line, index) => {
              return '<span class="line-number">' + (index + 1) + '</span>' + line;
          }).join('\\n');
          pre.innerHTML = lineNumberedHtml;
          pre.style.whiteSpace = 'pre';
      });
    }

    window.onload = function () {
        initFilter();
        addLineNumbers();
    };
    </script>

    <input id="fileSearch" type="text" onkeyup="filterFiles()" placeholder="Search files...">
"""

_SEARCH_BOX_RE = re.compile(r'<input\s+id="fileSearch".*?>')
_FILE_SELECT_RE = re.compile(r'<select id="files">')


def augment_html(html: str) -> str | None:
    """Return augmented HTML, or None if there is nothing to add.

    Nothing is added when the search box is already present or when the page
    has no file selector to anchor it to.
    """
    if _SEARCH_BOX_RE.search(html):
        return None
    augmented, count = _FILE_SELECT_RE.subn(lambda m: ADDITION_HTML + m.group(0), html)
    return augmented if count else None


def augment_report(report_path: Path) -> bool:
    """Augment a rendered report in place.

    Returns:
        True if the file was rewritten, False if it was already augmented or
        has no file selector.

    Raises:
        OutputError: If the report cannot be read or written.
    """
    try:
        html = report_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise OutputError.augment_failed(str(report_path), str(e)) from e

    augmented = augment_html(html)
    if augmented is None:
        if _SEARCH_BOX_RE.search(html):
            log.info("report_already_augmented", report=str(report_path))
        else:
            log.warning("report_selector_missing", report=str(report_path))
        return False

    try:
        report_path.write_text(augmented, encoding="utf-8")
    except OSError as e:
        raise OutputError.augment_failed(str(report_path), str(e)) from e

    log.info("report_augmented", report=str(report_path))
    return True
