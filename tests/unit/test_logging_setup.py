import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from formula_core.logging_setup import JsonFormatter, configure_logging


class LoggingSetupTests(unittest.TestCase):
    def test_json_formatter_carries_event(self):
        record = logging.LogRecord("tradier_formula.service", logging.INFO, __file__, 1, "installed %s", ("x",), None)
        record.event = "installed"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["msg"], "installed x")
        self.assertEqual(payload["event"], "installed")
        self.assertEqual(payload["level"], "INFO")

    def test_configure_is_idempotent_and_writes_file(self):
        logger = logging.getLogger("tradier_formula")
        saved = list(logger.handlers)
        for h in saved:
            logger.removeHandler(h)
        try:
            with tempfile.TemporaryDirectory() as tmp:
                first = configure_logging(console=False, directory=Path(tmp))
                second = configure_logging(console=False, directory=Path(tmp))
                self.assertIs(first, second)
                self.assertEqual(len(first.handlers), 1)

                logging.getLogger("tradier_formula.service").info("fetched", extra={"event": "fetched"})
                for h in first.handlers:
                    h.flush()
                lines = (Path(tmp) / "tradier-formula.log").read_text(encoding="utf-8").splitlines()
                self.assertEqual(json.loads(lines[-1])["event"], "fetched")

                for h in list(first.handlers):
                    first.removeHandler(h)
                    h.close()
        finally:
            for h in saved:
                logger.addHandler(h)


if __name__ == "__main__":
    unittest.main()
