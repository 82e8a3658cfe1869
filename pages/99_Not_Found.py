import streamlit as st

from element_component import navigate

st.title("404")
st.write("Oops! Page not found.")

if st.button("Return to Home"):
    navigate("/")
