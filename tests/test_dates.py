import unittest
import pandas as pd
from dataco_analysis.utils.dates import drop_unparsed, order_day, parse_order_dates, year_month


class TestDates(unittest.TestCase):
    def setUp(self):
        self.values = pd.Series(["1/31/2018 22:56", "12/5/2017 3:00", " 7/4/2016", "bad", "13/1/2017 1:00", None])

    def test_parse_parts(self):
        parts = parse_order_dates(self.values)
        self.assertEqual(parts.loc[0].tolist(), [2018, 1, 31])
        self.assertEqual(parts.loc[1].tolist(), [2017, 12, 5])
        self.assertEqual(parts.loc[2].tolist(), [2016, 7, 4])
        self.assertTrue(parts.loc[3:].isna().all().all())

    def test_year_month_zero_pads(self):
        ym = year_month(self.values)
        self.assertEqual(ym.iloc[0], "2018-01")
        self.assertEqual(ym.iloc[1], "2017-12")
        self.assertEqual(ym.iloc[2], "2016-07")
        self.assertTrue(ym.iloc[3:].isna().all())

    def test_order_day(self):
        days = order_day(self.values)
        self.assertEqual(days.iloc[0], pd.Timestamp("2018-01-31"))
        self.assertEqual(days.iloc[1], pd.Timestamp("2017-12-05"))
        self.assertTrue(days.iloc[3:].isna().all())

    def test_impossible_calendar_day_is_missing(self):
        days = order_day(pd.Series(["2/30/2017 1:00"]))
        self.assertTrue(pd.isna(days.iloc[0]))

    def test_drop_unparsed_logs(self):
        df = pd.DataFrame({"key": year_month(self.values)})
        with self.assertLogs("dataco_analysis.utils.dates", level="WARNING") as cm:
            out = drop_unparsed(df, "key")
        self.assertEqual(len(out), 3)
        self.assertIn("3 rows", cm.output[0])


if __name__ == '__main__':
    unittest.main()
