import tempfile
import unittest
from pathlib import Path

from PIL import Image

from klondike_ui.assets.scripts import generate_deck


class GenerateDeckTestCase(unittest.TestCase):
    def test_file_names_match_front_end(self):
        self.assertEqual("heart_1.png", generate_deck.card_file_name("hearts", 1))
        self.assertEqual("spade_13.png", generate_deck.card_file_name("spades", 13))

    def test_generate_one_suit_and_back(self):
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "cards"
            written = generate_deck.generate(out, suits=("diamonds",))
            self.assertEqual(14, len(written))
            self.assertTrue((out / "diamond_12.png").exists())
            with Image.open(out / "back.png") as img:
                self.assertEqual((generate_deck.DISPLAY_W, generate_deck.DISPLAY_H), img.size)


if __name__ == "__main__":
    unittest.main()
