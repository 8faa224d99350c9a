#!/usr/bin/env python3
"""
MediAssist - Main Application Entry Point
Upload a medical report, get a plain-language analysis, translate it, export it.
"""

import streamlit as st
from ui import components
from ui.user_layout import UserLayout

# Configure Streamlit page
st.set_page_config(
    page_title="MediAssist",
    page_icon="🩺",
    layout="wide"
)

def main():
    """Main application entry point"""
    components.render_header()

    try:
        UserLayout().render()
    except Exception as e:
        st.error(f"❌ Application Error: {str(e)}")
        with st.expander("Details"):
            st.code(str(e))

    components.render_footer()

if __name__ == "__main__":
    main()
