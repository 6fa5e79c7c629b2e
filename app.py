"""Streamlit entry point for the A/R Project Impact Calculator.

This script configures logging, sets up the session state, offers preset
projects in the sidebar and displays a landing page.  The calculators and
result views are implemented in separate files under the `pages/`
directory.
"""

import streamlit as st

from impact_calc.params import ForestInputs
from impact_calc.settings import configure_logging, list_presets, load_preset

st.set_page_config(page_title="A/R Project Impact Calculator", layout="wide")


def main() -> None:
    configure_logging()

    # --- SESSION SETUP ------------------------------------------------------
    if "forest_inputs" not in st.session_state:
        st.session_state.forest_inputs = ForestInputs()

    # --- SIDEBAR: PRESETS ---------------------------------------------------
    st.sidebar.header("Load Preset Project")
    preset_choice = st.sidebar.selectbox("Preset", ["Default"] + list_presets())
    if st.sidebar.button("Apply preset"):
        st.session_state.forest_inputs = ForestInputs() if preset_choice == "Default" else load_preset(preset_choice)
        st.sidebar.success(f"Loaded '{preset_choice}'. Open **Forest Inputs** to review it.")

    # --- MAIN PAGE ----------------------------------------------------------
    st.title("A/R Project Impact Calculator")
    st.markdown(
        """
        Estimate the environmental impact of restoration projects from a
        handful of project parameters.

        - **Forest** (afforestation / reforestation): year-by-year carbon
          sequestration from planting density, growth, mortality and
          biomass factors, optionally for a mix of species, with cost,
          carbon-credit, biodiversity, green-cover and beneficiary estimates.
        - **Water** (water-body restoration): water captured from rainfall,
          energy saved and emissions avoided, with cost and benefit estimates.

        Results can be downloaded as CSV tables or PDF reports.
        """
    )

    with st.expander("How the forest projection works"):
        st.markdown(
            """
            For every project year the surviving share of trees follows
            compounded annual mortality. Growing stock grows linearly with
            age and is converted to above-ground biomass (wood density × BEF),
            below-ground biomass (root-to-shoot ratio), carbon (carbon
            fraction) and CO₂e (× 44/12). The annual increment is the change
            in CO₂e stock over the previous year.

            For a species mix, the area is split by proportion, each species
            is projected with its own parameters and the yearly series are
            summed.
            """
        )

    st.info("Start on the **Forest Inputs** or **Water Impact** page in the sidebar menu.")


if __name__ == "__main__":
    main()
