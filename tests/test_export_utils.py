import os
import unittest
import pandas as pd
from tests.conftest import make_temp_dir, cleanup_dir
from dataco_analysis.data_processing.export_utils import export_to_excel
from dataco_analysis.data_processing.formatting_utils import safe_sheet_name


class TestExportUtils(unittest.TestCase):
    def setUp(self):
        self.tmp = make_temp_dir(prefix='export_test_')

    def tearDown(self):
        cleanup_dir(self.tmp)

    def test_one_sheet_per_result(self):
        sheets = {
            "monthly_kpis": pd.DataFrame({"year_month": ["2017-01"], "total_sales": [1234.5]}),
            "rfm/summary": pd.DataFrame({"customer_segment": ["Champions"], "total_monetary": [10.0]}),
        }
        path = export_to_excel(sheets, os.path.join(self.tmp, "nested", "report.xlsx"))
        self.assertTrue(os.path.isfile(path))
        book = pd.ExcelFile(path)
        self.assertEqual(book.sheet_names, ["monthly_kpis", "rfm_summary"])
        back = pd.read_excel(path, sheet_name="monthly_kpis")
        self.assertAlmostEqual(back.loc[0, "total_sales"], 1234.5)

    def test_colliding_sheet_names(self):
        sheets = {"a/b": pd.DataFrame({"x": [1]}), "a:b": pd.DataFrame({"x": [2]})}
        with self.assertRaises(ValueError):
            export_to_excel(sheets, os.path.join(self.tmp, "r.xlsx"))

    def test_empty(self):
        with self.assertRaises(ValueError):
            export_to_excel({}, os.path.join(self.tmp, "r.xlsx"))


class TestFormatting(unittest.TestCase):
    def test_sheet_name(self):
        self.assertEqual(safe_sheet_name("x" * 40), "x" * 31)
        self.assertEqual(safe_sheet_name("a[b]"), "a_b_")


if __name__ == '__main__':
    unittest.main()
