from datetime import date

import streamlit as st

from kitten_intake.checklist import (
    dose_display,
    format_number,
    prepare_dispense_summary,
    prepare_foster_checklist,
    schedule_summary,
)
from kitten_intake.config import load_defaults
from kitten_intake.doses import dose_animals, is_dose_valid
from kitten_intake.models import MEDICATIONS, OUT_OF_RANGE, PANACUR_DAY_OPTIONS, PONAZURIL_DAY_OPTIONS, TOPICALS, Animal
from kitten_intake.schedule import compute_schedule

st.set_page_config(page_title="Kitten Intake", page_icon="🐱", layout="wide")
st.title("🐱 Kitten Intake Dosing")

defaults = load_defaults()

if "kitten_count" not in st.session_state:
    st.session_state["kitten_count"] = 1

st.sidebar.markdown("### Kittens")
c1, c2 = st.sidebar.columns(2)
if c1.button("Add kitten"):
    st.session_state["kitten_count"] += 1
if c2.button("Remove", disabled=st.session_state["kitten_count"] <= 1):
    st.session_state["kitten_count"] -= 1
today = st.sidebar.date_input("Intake date", value=date.today())

page = st.sidebar.radio("Page", ["Intake", "Foster checklist", "Dispense summary"])

animals: list[Animal] = []
for i in range(st.session_state["kitten_count"]):
    kitten_id = f"kitten-{i + 1}"
    with st.expander(f"Kitten {i + 1}", expanded=(page == "Intake")):
        name = st.text_input("Name", key=f"{kitten_id}-name")
        weight = st.number_input("Weight (g)", min_value=0.0, value=0.0, step=10.0, key=f"{kitten_id}-weight")
        topical = st.radio(
            "Flea topical", TOPICALS, index=TOPICALS.index(defaults.topical), horizontal=True, key=f"{kitten_id}-topical"
        )
        panacur_days = st.radio(
            "Panacur days",
            PANACUR_DAY_OPTIONS,
            index=PANACUR_DAY_OPTIONS.index(defaults.panacur_days),
            horizontal=True,
            key=f"{kitten_id}-panacur",
        )
        ponazuril_days = st.radio(
            "Ponazuril days",
            PONAZURIL_DAY_OPTIONS,
            index=PONAZURIL_DAY_OPTIONS.index(defaults.ponazuril_days),
            horizontal=True,
            key=f"{kitten_id}-ponazuril",
        )
        cols = st.columns(len(MEDICATIONS))
        status = {}
        for col, med in zip(cols, MEDICATIONS):
            options = ["todo", "delay", "done", "skip"] if med == "flea" else ["todo", "done", "skip"]
            status[med] = col.selectbox(med.capitalize(), options, key=f"{kitten_id}-{med}-status")
        ringworm = st.radio(
            "Ringworm", ["not-scanned", "positive", "negative"], horizontal=True, key=f"{kitten_id}-ringworm"
        )
        if weight <= 0:
            st.caption("Enter a weight to calculate doses.")
            continue
        animal = Animal(
            weight_grams=float(weight),
            name=name,
            animal_id=kitten_id,
            topical=topical,
            panacur_days=int(panacur_days),
            ponazuril_days=int(ponazuril_days),
            medication_status=status,
            ringworm_status=ringworm,
        )
        animals.append(animal)
        st.caption(f"{format_number(animal.weight_grams)} g ({format_number(animal.weight_lb, 2)} lb)")

if not animals:
    st.info("No kittens with a weight yet.")
    st.stop()

dosed = dose_animals(animals)
result = compute_schedule(dosed, today=today)

if page == "Intake":
    st.header("Doses")
    table = []
    for item in dosed:
        d = item.doses
        table.append(
            {
                "kitten": item.animal.display_name,
                "panacur": dose_display("panacur", d.panacur),
                "ponazuril": dose_display("ponazuril", d.ponazuril),
                "revolution": dose_display("revolution", d.revolution),
                "advantage II": dose_display("advantage", d.advantage),
                "drontal": d.drontal if not is_dose_valid(d.drontal) else dose_display("drontal", d.drontal),
                "capstar": dose_display("capstar", d.capstar),
            }
        )
    st.dataframe(table, use_container_width=True)
    for item in dosed:
        lines = schedule_summary(item)
        st.subheader(item.animal.display_name)
        if not lines:
            st.caption("Nothing owed to foster.")
        for line in lines:
            timing = f" ({line.timing})" if line.timing else ""
            st.write(f"- {line.medication}: {line.dose} x {line.days} day(s), {line.total}{timing}")
    for animal_id, medication in result.out_of_range:
        st.warning(f"{animal_id}: {medication} {OUT_OF_RANGE.lower()} for this weight")

if page == "Foster checklist":
    st.header("Foster checklist")
    checklist = prepare_foster_checklist(animals, result.schedules)
    if checklist.is_empty:
        st.info("No medications needed for foster care.")
    else:
        columns = [f"{h.name}: {m.name} ({m.dose})" for h in checklist.headers for m in h.medications]
        table = []
        for row in checklist.rows:
            entry = {"date": row.display_date}
            for column, cell in zip(columns, row.cells):
                entry[column] = "☐" if cell.due else "—"
            table.append(entry)
        st.dataframe(table, use_container_width=True)

if page == "Dispense summary":
    st.header("Dispense summary")
    lines = prepare_dispense_summary(result.totals)
    if not lines:
        st.info("Nothing to dispense.")
    for label, amount in lines:
        st.metric(label, amount)
