"""SQL query registry for running the supply-chain analysis inside BigQuery.

Each entry mirrors one DataFrame query in `dataco_analysis.data_processing`.
Templates take the fully-qualified source table as `{orders_table}`; the
anomaly window and sample size are bound as query parameters. The category
and market anomaly comparisons share one template.
"""

# ---------------------------------------------------------------------------
# Shared date normalisation ('M/D/YYYY H:MM' -> DATE)
# ---------------------------------------------------------------------------

_ORDERS_CLEAN_CTE = """
orders_clean AS (
  SELECT
    *,
    SAFE.PARSE_DATE('%m/%d/%Y', REGEXP_EXTRACT(`Order Date (DateOrders)`, r'^\\s*(\\d{{1,2}}/\\d{{1,2}}/\\d{{4}})')) AS order_date
  FROM `{orders_table}`
)"""

# ---------------------------------------------------------------------------
# Block 1: sales & profitability
# ---------------------------------------------------------------------------

MONTHLY_KPIS_SQL = """
WITH""" + _ORDERS_CLEAN_CTE + """
SELECT
  FORMAT_DATE('%Y-%m', order_date) AS year_month,
  SUM(Sales) AS total_sales,
  SUM(`Benefit per order`) AS total_profit,
  COUNT(DISTINCT `Order Id`) AS orders_count,
  SAFE_DIVIDE(SUM(`Benefit per order`) * 100.0, SUM(Sales)) AS profit_margin_pct,
  SAFE_DIVIDE(SUM(Sales), COUNT(DISTINCT `Order Id`)) AS average_order_value_aov
FROM orders_clean
WHERE order_date IS NOT NULL
GROUP BY year_month
ORDER BY year_month;
"""

SALES_GROWTH_SQL = """
WITH""" + _ORDERS_CLEAN_CTE + """,
monthly_sales AS (
  SELECT FORMAT_DATE('%Y-%m', order_date) AS year_month, SUM(Sales) AS total_sales
  FROM orders_clean
  WHERE order_date IS NOT NULL
  GROUP BY year_month
)
SELECT
  year_month,
  total_sales,
  SAFE_DIVIDE((total_sales - LAG(total_sales, 1) OVER w) * 100.0, LAG(total_sales, 1) OVER w) AS mom_growth_pct,
  SAFE_DIVIDE((total_sales - LAG(total_sales, 12) OVER w) * 100.0, LAG(total_sales, 12) OVER w) AS yoy_growth_pct
FROM monthly_sales
WINDOW w AS (ORDER BY year_month)
ORDER BY year_month;
"""

_ANOMALY_TEMPLATE = """
WITH""" + _ORDERS_CLEAN_CTE + """,
keyed AS (
  SELECT FORMAT_DATE('%Y-%m', order_date) AS year_month, Sales, <dim_col> AS <dim>
  FROM orders_clean
  WHERE order_date IS NOT NULL
),
normal AS (
  SELECT <dim>, SUM(Sales) / COUNT(DISTINCT year_month) AS avg_monthly_sales_normal
  FROM keyed
  WHERE year_month < @normal_before
  GROUP BY <dim>
),
anomaly AS (
  SELECT <dim>, SUM(Sales) / (SELECT COUNT(DISTINCT m) FROM UNNEST(@anomaly_months) AS m) AS avg_monthly_sales_anomaly
  FROM keyed
  WHERE year_month IN UNNEST(@anomaly_months)
  GROUP BY <dim>
)
SELECT
  n.<dim>,
  n.avg_monthly_sales_normal,
  COALESCE(a.avg_monthly_sales_anomaly, 0) AS avg_monthly_sales_anomaly,
  SAFE_DIVIDE((COALESCE(a.avg_monthly_sales_anomaly, 0) - n.avg_monthly_sales_normal) * 100.0,
              n.avg_monthly_sales_normal) AS performance_change_pct
FROM normal AS n
LEFT JOIN anomaly AS a USING (<dim>)
ORDER BY performance_change_pct ASC;
"""


def _anomaly_sql(dim_col: str, dim: str) -> str:
    return _ANOMALY_TEMPLATE.replace("<dim_col>", dim_col).replace("<dim>", dim)


CATEGORY_ANOMALY_SQL = _anomaly_sql("`Category Name`", "category_name")
MARKET_ANOMALY_SQL = _anomaly_sql("Market", "market")

# ---------------------------------------------------------------------------
# Block 2: delivery performance
# ---------------------------------------------------------------------------

DELIVERY_STATUS_SQL = """
SELECT
  `Delivery Status`,
  COUNT(*) AS total_orders,
  COUNT(*) * 100.0 / SUM(COUNT(*)) OVER () AS percentage_of_total
FROM `{orders_table}`
GROUP BY `Delivery Status`
ORDER BY total_orders DESC;
"""

LATE_DELIVERY_SQL = """
SELECT
  Market,
  `Shipping Mode`,
  COUNTIF(`Delivery Status` = 'Late delivery') * 100.0 / COUNT(*) AS late_orders_pct,
  AVG(IF(`Delivery Status` = 'Late delivery',
         `Days for shipping (real)` - `Days for shipment (scheduled)`, NULL)) AS avg_delay_days
FROM `{orders_table}`
GROUP BY Market, `Shipping Mode`
ORDER BY late_orders_pct DESC;
"""

# ---------------------------------------------------------------------------
# Block 3: RFM segmentation
# ---------------------------------------------------------------------------

RFM_SUMMARY_SQL = """
WITH""" + _ORDERS_CLEAN_CTE + """,
customer_rfm AS (
  SELECT
    `Customer Id` AS customer_id,
    DATE_DIFF((SELECT MAX(order_date) FROM orders_clean), MAX(order_date), DAY) AS Recency,
    COUNT(DISTINCT `Order Id`) AS Frequency,
    SUM(Sales) AS Monetary
  FROM orders_clean
  WHERE order_date IS NOT NULL
  GROUP BY customer_id
),
rfm_scores AS (
  SELECT
    customer_id, Monetary,
    NTILE(4) OVER (ORDER BY Recency DESC) AS R_Score,
    NTILE(4) OVER (ORDER BY Frequency ASC) AS F_Score,
    NTILE(4) OVER (ORDER BY Monetary ASC) AS M_Score
  FROM customer_rfm
),
customer_segments AS (
  SELECT
    customer_id, Monetary,
    CASE
      WHEN R_Score = 4 AND F_Score = 4 AND M_Score = 4 THEN 'Champions'
      WHEN R_Score >= 3 AND F_Score >= 3 THEN 'Loyal Customers'
      WHEN R_Score <= 2 AND F_Score >= 3 AND M_Score >= 3 THEN 'At Risk (High Value)'
      WHEN R_Score <= 2 AND F_Score <= 2 THEN 'Hibernating'
      WHEN R_Score = 4 AND F_Score <= 2 THEN 'New Customers'
      ELSE 'Regular'
    END AS customer_segment
  FROM rfm_scores
)
SELECT
  customer_segment,
  COUNT(customer_id) AS customer_count,
  SUM(Monetary) AS total_monetary,
  SUM(Monetary) * 100.0 / (SELECT SUM(Monetary) FROM customer_segments) AS monetary_percentage
FROM customer_segments
GROUP BY customer_segment
ORDER BY total_monetary DESC;
"""

# ---------------------------------------------------------------------------
# Block 4: t-test preparation
# ---------------------------------------------------------------------------

TTEST_GROUPS_SQL = """
SELECT
  customer_id,
  Monetary,
  IF(had_late_delivery_flag = 1, 'Experienced Delays', 'No Delays') AS delivery_experience
FROM (
  SELECT
    `Customer Id` AS customer_id,
    MAX(IF(`Delivery Status` = 'Late delivery', 1, 0)) AS had_late_delivery_flag,
    SUM(Sales) AS Monetary
  FROM `{orders_table}`
  GROUP BY `Customer Id`
);
"""

# ---------------------------------------------------------------------------
# Block 5: regression preparation
# ---------------------------------------------------------------------------

REGRESSION_FEATURES_SQL = """
SELECT
  `Order Item Profit Ratio` AS profit_ratio,
  LN(`Product Price`) AS log_product_price,
  `Order Item Discount` / `Product Price` AS discount_rate,
  `Order Item Quantity` AS quantity,
  IF(`Category Name` = 'Fishing', 1, 0) AS is_fishing,
  IF(`Category Name` = 'Cleats', 1, 0) AS is_cleats,
  IF(`Category Name` = 'Camping & Hiking', 1, 0) AS is_camping,
  IF(`Category Name` = 'Cardio Equipment', 1, 0) AS is_cardio,
  IF(Market = 'LATAM', 1, 0) AS is_latam,
  IF(Market = 'Europe', 1, 0) AS is_europe,
  IF(Market = 'USCA', 1, 0) AS is_usca,
  IF(Market = 'Africa', 1, 0) AS is_africa,
  (`Order Item Discount` / `Product Price`) * IF(`Category Name` = 'Fishing', 1, 0) AS discount_interaction_fishing
FROM `{orders_table}`
WHERE `Product Price` > 0 AND `Order Item Discount` < `Product Price`
ORDER BY RAND()
LIMIT @sample_size;
"""

FETCH_ORDERS_SQL = """
SELECT * FROM `{orders_table}`;
"""

# ---------------------------------------------------------------------------
# Registry & helpers
# ---------------------------------------------------------------------------

QUERIES: dict[str, str] = {
    "monthly_kpis": MONTHLY_KPIS_SQL,
    "sales_growth": SALES_GROWTH_SQL,
    "category_anomaly": CATEGORY_ANOMALY_SQL,
    "market_anomaly": MARKET_ANOMALY_SQL,
    "delivery_status": DELIVERY_STATUS_SQL,
    "late_delivery": LATE_DELIVERY_SQL,
    "rfm_summary": RFM_SUMMARY_SQL,
    "ttest_groups": TTEST_GROUPS_SQL,
    "regression_features": REGRESSION_FEATURES_SQL,
    "fetch_orders": FETCH_ORDERS_SQL,
}


def get_query(name: str) -> str:
    """Return SQL template by registry key.

    Raises KeyError if the name is unknown.
    """
    try:
        return QUERIES[name]
    except KeyError as e:
        raise KeyError(f"Unknown query '{name}'. Available: {', '.join(sorted(QUERIES))}") from e


def render_query(name: str, orders_table: str) -> str:
    """Template with the source table filled in."""
    if not orders_table:
        raise ValueError("orders_table must be a fully-qualified table name")
    return get_query(name).format(orders_table=orders_table)


def list_available_queries() -> list[str]:
    """List all registered query keys."""
    return sorted(QUERIES)
