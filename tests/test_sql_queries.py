import os
import unittest
from unittest import mock
import pandas as pd
from tests.conftest import make_temp_dir, cleanup_dir
from dataco_analysis.db_connect.sql_queries import (
    QUERIES,
    get_query,
    list_available_queries,
    render_query,
)
from dataco_analysis.db_connect.warehouse import DEFAULT_PARAMS, fetch_orders, run_named_query
from dataco_analysis.utils.bq import _query_param, run_sql

TABLE = "proj.supply.orders"


class TestQueryRegistry(unittest.TestCase):
    def test_list(self):
        names = list_available_queries()
        self.assertEqual(names, sorted(QUERIES))
        for expected in ("monthly_kpis", "sales_growth", "category_anomaly", "market_anomaly", "delivery_status",
                         "late_delivery", "rfm_summary", "ttest_groups", "regression_features"):
            self.assertIn(expected, names)

    def test_unknown_query(self):
        with self.assertRaises(KeyError) as cm:
            get_query("nope")
        self.assertIn("monthly_kpis", str(cm.exception))

    def test_render_fills_table_everywhere(self):
        for name in list_available_queries():
            with self.subTest(name=name):
                sql = render_query(name, TABLE)
                self.assertIn(f"`{TABLE}`", sql)
                self.assertNotIn("{orders_table}", sql)

    def test_render_keeps_regex_quantifiers(self):
        sql = render_query("monthly_kpis", TABLE)
        self.assertIn(r"(\d{1,2}/\d{1,2}/\d{4})", sql)

    def test_render_requires_table(self):
        with self.assertRaises(ValueError):
            render_query("monthly_kpis", "")

    def test_market_anomaly_groups_by_market(self):
        sql = render_query("market_anomaly", TABLE)
        self.assertIn("Market AS market", sql)
        self.assertIn("USING (market)", sql)
        self.assertNotIn("<dim", sql)
        self.assertNotIn("category_name", sql)

    def test_anomaly_window_counts_distinct_months(self):
        for name in ("category_anomaly", "market_anomaly"):
            with self.subTest(name=name):
                self.assertIn("COUNT(DISTINCT m) FROM UNNEST(@anomaly_months)", get_query(name))


class TestWarehouse(unittest.TestCase):
    def test_default_params_bound(self):
        seen = {}

        def fake_fetch(sql, params):
            seen["sql"], seen["params"] = sql, params
            return pd.DataFrame({"category_name": ["A"]})

        out = run_named_query("category_anomaly", TABLE, fetch_fn=fake_fetch)
        self.assertEqual(len(out), 1)
        self.assertIn("UNNEST(@anomaly_months)", seen["sql"])
        self.assertEqual(seen["params"]["anomaly_months"], ["2017-11", "2017-12", "2018-01"])
        self.assertEqual(seen["params"]["normal_before"], "2017-11")

    def test_market_anomaly_default_params(self):
        seen = {}

        def fake_fetch(sql, params):
            seen["params"] = params
            return pd.DataFrame({"market": ["LATAM"]})

        run_named_query("market_anomaly", TABLE, {"normal_before": "2017-06"}, fetch_fn=fake_fetch)
        self.assertEqual(seen["params"]["anomaly_months"], ["2017-11", "2017-12", "2018-01"])
        self.assertEqual(seen["params"]["normal_before"], "2017-06")
        # overrides do not leak into the shared defaults
        self.assertEqual(DEFAULT_PARAMS["category_anomaly"]["normal_before"], "2017-11")

    def test_override_params(self):
        seen = {}

        def fake_fetch(sql, params):
            seen["params"] = params
            return pd.DataFrame()

        run_named_query("regression_features", TABLE, {"sample_size": 50}, fetch_fn=fake_fetch)
        self.assertEqual(seen["params"], {"sample_size": 50})

    def test_no_params_passes_none(self):
        seen = {}

        def fake_fetch(sql, params):
            seen["params"] = params
            return pd.DataFrame()

        run_named_query("delivery_status", TABLE, fetch_fn=fake_fetch)
        self.assertIsNone(seen["params"])

    def test_table_from_env(self):
        env = {"PROJECT_ID": "p", "DATASET_ID": "d", "TABLE_ID": "t"}
        with mock.patch.dict(os.environ, env):
            seen = {}
            run_named_query("ttest_groups", fetch_fn=lambda sql, params: seen.setdefault("sql", sql))
        self.assertIn("`p.d.t`", seen["sql"])

    def test_missing_table(self):
        with mock.patch("dataco_analysis.db_connect.warehouse.orders_table", return_value=None):
            with self.assertRaises(ValueError):
                run_named_query("monthly_kpis", fetch_fn=lambda sql, params: pd.DataFrame())

    def test_fetch_orders_cached(self):
        tmp = make_temp_dir()
        calls = []

        def fake_fetch(sql, params):
            calls.append(sql)
            return pd.DataFrame({"Order Id": [1, 2]})

        try:
            with mock.patch.dict(os.environ, {"DATACO_CACHE_DIR": tmp}):
                first = fetch_orders(TABLE, fetch_fn=fake_fetch)
                second = fetch_orders(TABLE, fetch_fn=fake_fetch)
            self.assertEqual(len(calls), 1)
            pd.testing.assert_frame_equal(first, second)
        finally:
            cleanup_dir(tmp)


class TestQueryParams(unittest.TestCase):
    def test_scalar_and_array(self):
        scalar = _query_param("sample_size", 10)
        self.assertEqual(scalar.type_, "INT64")
        array = _query_param("anomaly_months", ["2017-11"])
        self.assertEqual(array.array_type, "STRING")
        self.assertEqual(array.values, ["2017-11"])


class TestRunSql(unittest.TestCase):
    def _client(self, *outcomes):
        client = mock.Mock()
        jobs = []
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                jobs.append(outcome)
            else:
                job = mock.Mock()
                job.result.return_value.to_dataframe.return_value = outcome
                jobs.append(job)
        client.query.side_effect = jobs
        return client

    @mock.patch("dataco_analysis.utils.bq.time.sleep")
    def test_retries_then_returns(self, sleep):
        frame = pd.DataFrame({"year_month": ["2017-11"]})
        client = self._client(TimeoutError("slow"), frame)
        with self.assertLogs("dataco_analysis.utils.bq", level="WARNING"):
            out = run_sql("SELECT 1", {"sample_size": 5}, client=client, max_retries=3)
        self.assertIs(out, frame)
        self.assertEqual(client.query.call_count, 2)
        sleep.assert_called_once_with(2)
        job_config = client.query.call_args.kwargs["job_config"]
        self.assertEqual(job_config.query_parameters[0].name, "sample_size")

    @mock.patch("dataco_analysis.utils.bq.time.sleep")
    def test_gives_up_after_max_retries(self, sleep):
        client = self._client(TimeoutError("a"), TimeoutError("b"))
        with self.assertLogs("dataco_analysis.utils.bq", level="WARNING"):
            with self.assertRaises(TimeoutError):
                run_sql("SELECT 1", client=client, max_retries=2)
        self.assertEqual(client.query.call_count, 2)

    def test_no_params_no_job_config(self):
        client = self._client(pd.DataFrame())
        run_sql("SELECT 1", client=client)
        self.assertIsNone(client.query.call_args.kwargs["job_config"])


if __name__ == '__main__':
    unittest.main()
