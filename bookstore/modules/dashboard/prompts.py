"""
Prompt construction for the AI business analysis.
The store operates in Thai, so the prompt and the expected answer are Thai.
"""

import json

from bookstore.core.utils import format_number
from .schemas import AnalyzeRequest

NO_TOP_PRODUCTS = "ไม่มีข้อมูลสินค้าขายดี"
NO_INCOME_SERIES = "ไม่มีข้อมูลรายได้รายเดือน"

ANALYSIS_PROMPT_TEMPLATE = """\
คุณคือผู้เชี่ยวชาญด้านการวิเคราะห์ธุรกิจ ช่วยวิเคราะห์ข้อมูลการขายของร้านหนังสือนี้ เพื่อหาแนวโน้ม จุดแข็ง จุดอ่อน และให้คำแนะนำเชิงกลยุทธ์

**ข้อมูลปัจจุบัน (สกุลเงินบาท):**
- รายได้รวมทั้งหมด: {total_revenue} บาท
- สินค้าขายดี 5 อันดับแรก: {top_products}
- ข้อมูลรายได้รายเดือน/รายวัน: {income_series}

โปรดเขียนบทวิเคราะห์เป็นภาษาไทยอย่างมืออาชีพ ความยาวประมาณ 4-5 ย่อหน้า โดยครอบคลุม:
1. แนวโน้มรายได้ (Revenue Trends) และสุขภาพทางการเงินโดยรวม
2. การวิเคราะห์สินค้าขายดี (Top Sellers) และโอกาสในการทำ Cross-sell หรือ Up-sell
3. คำแนะนำเชิงกลยุทธ์เพื่อเพิ่มยอดขายและผลกำไรในไตรมาสถัดไป
4. จุดที่น่ากังวลหรือควรปรับปรุง
"""


def summarize_top_products(data: AnalyzeRequest) -> str:
    if not data.top_products:
        return NO_TOP_PRODUCTS
    return "; ".join(
        f"{product.name or ''} (ขาย {format_number(product.total_sold)} ชิ้น, "
        f"รายได้ {format_number(product.total_revenue)} บาท)"
        for product in data.top_products
    )


def summarize_income_series(data: AnalyzeRequest) -> str:
    if not data.monthly_income:
        return NO_INCOME_SERIES
    return json.dumps(
        [
            {
                "month": bucket.month,
                "online": format_number(bucket.online_income),
                "sale": format_number(bucket.sale_income),
                "total_income": format_number(bucket.income),
            }
            for bucket in data.monthly_income
        ],
        ensure_ascii=False,
    )


def build_analysis_prompt(data: AnalyzeRequest) -> str:
    """Interpolate the dashboard figures into the analysis prompt."""
    return ANALYSIS_PROMPT_TEMPLATE.format(
        total_revenue=format_number(data.total_all_income or 0),
        top_products=summarize_top_products(data),
        income_series=summarize_income_series(data),
    )
