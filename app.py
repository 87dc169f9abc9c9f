import streamlit as st
import sys
import os

# ==========================================
# 0. 路径与导入配置
# ==========================================
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from core.log_setup import setup_logging
from ui.damage_calc import render_damage_calc

# ==========================================
# 1. 界面配置
# ==========================================
st.set_page_config(page_title="伤害计算器", layout="wide")
setup_logging()

st.sidebar.title("⚙️ 计算设置")
render_damage_calc()
