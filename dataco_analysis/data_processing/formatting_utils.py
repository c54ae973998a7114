import re


def safe_sheet_name(name: str) -> str:
    """Excel-safe sheet name: forbidden characters replaced, max 31 chars."""
    name = re.sub(r'[\[\]:*?/\\]', '_', str(name))
    return name[:31] or "Sheet1"


def write_sheet_with_thousands(writer, df, sheet_name, thousand_cols=None, index=False):
    """Write `df` to an open xlsxwriter-backed ExcelWriter, formatting `thousand_cols`."""
    if thousand_cols is None:
        thousand_cols = []
    df.to_excel(writer, sheet_name=sheet_name, index=index)
    workbook = writer.book
    worksheet = writer.sheets[sheet_name]
    thousand_format = workbook.add_format({"num_format": "#,##0.00"})
    offset = 1 if index else 0
    for col_name in thousand_cols:
        if col_name in df.columns:
            col_idx = df.columns.get_loc(col_name) + offset
            worksheet.set_column(col_idx, col_idx, 16, thousand_format)
