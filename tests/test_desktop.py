import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    from PySide6.QtWidgets import QApplication
except ImportError:  # pragma: no cover
    QApplication = None

from polytension.core.animation import Polytension
from polytension.core.seed import Location

if QApplication is not None:
    from polytension.app.desktop import QPainterSurface, QtFrameScheduler, to_qcolor


@unittest.skipIf(QApplication is None, "PySide6 is not installed")
class DesktopTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def test_to_qcolor(self):
        color = to_qcolor("hsla(0, 100%, 50%, 0.2)")
        self.assertEqual((color.red(), color.green(), color.blue(), color.alpha()), (255, 0, 0, 51))

    def test_surface_paints_frame(self):
        surface = QPainterSurface(120, 80)
        session = Polytension(surface, QtFrameScheduler(1000), Location("polytension://local/?s=test"))
        session.run()
        surface.end()
        self.assertEqual((surface.image.width(), surface.image.height()), (120, 80))
        lit = [surface.image.pixelColor(x, y).red() + surface.image.pixelColor(x, y).green()
               + surface.image.pixelColor(x, y).blue() for x in range(0, 120, 6) for y in range(0, 80, 6)]
        self.assertGreater(max(lit), 0)
        session.reset()

    def test_resize(self):
        surface = QPainterSurface(10, 10)
        surface.resize(30.0, 20.0)
        self.assertEqual((surface.width, surface.height), (30, 20))

    def test_scheduler_cancel(self):
        fired = []
        scheduler = QtFrameScheduler(1000)
        timer = scheduler.schedule_next_frame(lambda: fired.append(1))
        self.assertTrue(timer.isActive())
        scheduler.cancel_scheduled_frame(timer)
        self.assertEqual(fired, [])


if __name__ == "__main__":
    unittest.main()
