from __future__ import annotations

from datetime import datetime
from typing import Union

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from randomizer import (
    chi_square_uniformity,
    describe_result,
    export_to_csv,
    generate_draws,
    summarize_sequence,
    time_seed,
)
from randomizer.random_utils import MODULUS, MULTIPLIER, INCREMENT
from randomizer.storage import (
    get_run_draws,
    get_runs,
    save_run,
    save_run_draws,
)

st.set_page_config(page_title="Seeded Randomizer Explorer", layout="wide")

st.title("Seeded Randomizer Explorer")
st.caption(
    f"seed = (seed × {MULTIPLIER} + {INCREMENT}) mod {MODULUS}; fraction = seed / {MODULUS}. "
    "Not suitable for cryptography."
)


def _parse_seed(raw: str) -> Union[int, str]:
    raw = raw.strip()
    if not raw:
        return time_seed()
    try:
        return int(raw)
    except ValueError:
        return raw


with st.sidebar:
    st.header("Generator setup")

    mode = st.radio("Mode", ["Draw new sequence", "View history"], index=0)

    if mode == "Draw new sequence":
        label = st.text_input("Run label", value=f"Run {datetime.now().strftime('%Y-%m-%d %H:%M')}")
        seed_text = st.text_input("Seed (blank = current time in ms)", value="")
        count = st.number_input("Number of draws", min_value=10, max_value=MODULUS, value=1000, step=10)
        max_value = st.number_input("Max value for next_int", min_value=1, max_value=1_000_000, value=100, step=1)
        bins = st.slider("Histogram bins", min_value=2, max_value=50, value=10, step=1)

        save_history = st.checkbox("Save to history (SQLite)", value=True)
        run = st.button("Draw", type="primary")
    else:
        st.info("History is stored locally in randomizer.db (SQLite).")
        history_limit = st.slider("How many runs", 5, 50, 25, 5)
        runs = get_runs(limit=history_limit)
        if runs:
            options = {f"#{r['id']} • {r['label']} • {r['created_at']}": r for r in runs}
            selected_label = st.selectbox("Select a run", list(options.keys()), index=0)
            selected = options[selected_label]
        else:
            selected = None


def render_results(df: pd.DataFrame, max_value: int, bins: int, title_prefix: str = ""):
    fractions = df["fraction"].astype(float).tolist()
    summary = summarize_sequence(fractions)
    uniformity = chi_square_uniformity(fractions, bins=bins)
    verdict = describe_result(summary, uniformity)

    # --- top metrics ---
    st.subheader(f"{title_prefix}Results")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Draws", f"{summary.count}")
    c2.metric("Mean fraction", f"{summary.mean:.4f}", f"{summary.mean - summary.expected_mean:+.4f}")
    c3.metric("Variance", f"{summary.variance:.4f}", f"{summary.variance - summary.expected_variance:+.4f}")
    c4.metric("Final state", f"{int(df['seed'].iloc[-1])}")

    c5, c6, c7, c8 = st.columns(4)
    c5.metric("Chi-square", f"{uniformity.statistic:.2f}")
    c6.metric("p-value", f"{uniformity.p_value:.4f}")
    c7.metric("Uniform?", "Yes" if uniformity.is_uniform else "No")
    c8.metric("Range", f"[{summary.minimum:.3f}, {summary.maximum:.3f}]")

    st.success(verdict) if uniformity.is_uniform else st.warning(verdict)

    # --- charts ---
    left, right = st.columns(2)

    with left:
        st.markdown(f"#### Values of next_int({max_value})")
        fig = px.histogram(df, x="value", nbins=min(bins, max_value + 1))
        fig.update_layout(height=360, bargap=0.05)
        st.plotly_chart(fig, use_container_width=True)

    with right:
        st.markdown("#### Successive fractions")
        fig2 = go.Figure()
        fig2.add_trace(
            go.Scatter(
                x=fractions[:-1],
                y=fractions[1:],
                mode="markers",
                marker=dict(size=4),
                name="(x[n], x[n+1])",
            )
        )
        fig2.update_layout(
            xaxis_title="fraction n",
            yaxis_title="fraction n + 1",
            height=360,
        )
        st.plotly_chart(fig2, use_container_width=True)

    st.markdown("#### Draw log")
    st.dataframe(df, use_container_width=True, hide_index=True)

    st.markdown("#### Download data")
    csv_str = export_to_csv(df)
    st.download_button(
        label="Download CSV",
        data=csv_str.encode("utf-8"),
        file_name="draws.csv",
        mime="text/csv",
    )

    return summary, uniformity


if mode == "Draw new sequence":
    if run:
        seed = _parse_seed(seed_text)
        st.write("**Seed:**", seed)

        df = generate_draws(seed, int(count), max_value=int(max_value))

        summary, uniformity = render_results(df, int(max_value), int(bins))

        if save_history:
            run_id = save_run(
                label=label.strip() or "Run",
                seed=seed,
                count=int(count),
                max_value=int(max_value),
                mean=summary.mean,
                p_value=uniformity.p_value,
            )
            save_run_draws(run_id, df)
            st.info(f"Saved to history as run #{run_id} (randomizer.db).")

else:
    if not selected:
        st.warning("No runs found yet. Draw a sequence first.")
    else:
        df = get_run_draws(int(selected["id"]))

        st.subheader("Run details")
        meta = {
            "label": selected["label"],
            "created_at": selected["created_at"],
            "seed": selected["seed"],
            "count": int(selected["count"]),
            "max_value": int(selected["max_value"]),
        }
        st.json(meta)

        if len(df):
            render_results(df, int(selected["max_value"]), 10, title_prefix="Historical ")
