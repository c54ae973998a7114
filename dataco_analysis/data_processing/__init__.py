"""
Data Processing Module

Query implementations over the orders DataFrame:
- Sales & profitability (KPIs, growth, anomaly window)
- Delivery performance
- RFM customer segmentation
- t-test preparation and regression features
- Excel export and charts
"""
