import sys
import unittest
from pathlib import Path


# Allow `import ourmarks.*` when running from repo root.
APP_ROOT = Path(__file__).resolve().parents[1]
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))


import fitz  # noqa: E402
import numpy as np  # noqa: E402

from ourmarks import debug_exporter  # noqa: E402
from ourmarks.text_fragment import TextFragment  # noqa: E402


class TestDebugOverlay(unittest.TestCase):
    def test_fragment_outline_colors(self) -> None:
        img = np.full((200, 200, 3), 255, dtype=np.uint8)
        rtl = TextFragment(value="م", is_rtl=True, x=10, y=10, width=50, height=20)
        ltr = TextFragment(value="1", is_rtl=False, x=100, y=10, width=50, height=20)
        debug_exporter.draw_fragments(img, [rtl, ltr], page_height=200, zoom=1.0)
        # Top edges sit at image row 200 - (10 + 20) = 170.
        self.assertEqual(tuple(img[170, 30]), debug_exporter.RTL_COLOR)
        self.assertEqual(tuple(img[170, 120]), debug_exporter.LTR_COLOR)
        self.assertEqual(tuple(img[100, 100]), (255, 255, 255))

    def test_row_band_is_translucent(self) -> None:
        img = np.full((100, 100, 3), 255, dtype=np.uint8)
        row = [TextFragment(value="1", is_rtl=False, x=20, y=20, width=40, height=20)]
        out = debug_exporter.draw_rows(img, [row], page_height=100, zoom=1.0)
        shaded = out[70, 40]
        self.assertLess(int(shaded[0]), 255)
        self.assertGreater(int(shaded[0]), 200)
        self.assertEqual(tuple(out[5, 5]), (255, 255, 255))

    def test_render_overlay_matches_page_size(self) -> None:
        doc = fitz.open()
        try:
            page = doc.new_page(width=200, height=100)
            page.insert_text((20, 50), "10234", fontsize=12)
            frag = TextFragment(value="10234", is_rtl=False, x=20, y=50, width=30, height=12)
            img = debug_exporter.render_overlay(page, [frag], [[frag]], dpi=144)
        finally:
            doc.close()
        self.assertEqual(img.shape, (200, 400, 3))


if __name__ == "__main__":
    unittest.main()
