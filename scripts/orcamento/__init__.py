"""
Budget dashboard ETL core.

Parsing, classification and reshaping of the accounting exports into the
long-format files read by the dashboard. Scripts under stage1_convert/ and
stage2_prepare/ are thin drivers around these modules.
"""
