from io import BytesIO
from pathlib import Path
import sys

import pikepdf
import pytest


SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


def build_pdf(encryption: pikepdf.Encryption | None = None, pages: int = 1) -> bytes:
    pdf = pikepdf.new()
    for _ in range(pages):
        pdf.add_blank_page(page_size=(200, 200))
    pdf.docinfo["/Title"] = "Quarterly statement"
    buf = BytesIO()
    if encryption is None:
        pdf.save(buf)
    else:
        pdf.save(buf, encryption=encryption)
    pdf.close()
    return buf.getvalue()


@pytest.fixture
def plain_pdf() -> bytes:
    return build_pdf(pages=2)


@pytest.fixture
def pdf_protected_with():
    def _make(password: str, owner: str | None = None) -> bytes:
        return build_pdf(pikepdf.Encryption(owner=owner or password, user=password, R=4), pages=2)

    return _make
