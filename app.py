import logging

import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px
import plotly.graph_objects as go

from components.bench import BenchConfig, WORKLOADS, make_keys, run_benchmark, tree_stats
from components.work_loads import RouteConfig, RouteGenerator, cidr_to_bits, ip_to_bits
from radixtrie import RadixTree

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Configure page
st.set_page_config(
    page_title="RadixBench",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Main title
st.title("🌳 RadixBench: Radix Tree Explorer")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Home", "Benchmark", "Explore Tree", "Routing Table"]
    )

    st.markdown("---")
    st.subheader("Workload")
    workload = st.selectbox("Key workload", WORKLOADS)
    num_keys = st.number_input("Number of keys", min_value=1, max_value=200_000, value=5_000, step=1_000)
    prefix_freq = st.slider("Prefix frequency", min_value=0.0, max_value=1.0, value=0.5)
    seed = st.number_input("Seed", min_value=0, value=42, step=1)

    st.markdown("---")
    st.subheader("Quick Actions")
    if st.button("🔄 Reset Tree"):
        st.session_state.pop('tree', None)
        st.session_state.pop('tree_key', None)
        st.rerun()


def build_config(**overrides):
    params = dict(
        workload=workload,
        num_keys=int(num_keys),
        prefix_freq=float(prefix_freq),
        seed=int(seed),
    )
    params.update(overrides)
    return BenchConfig(**params)


def get_tree():
    """Tree for the current workload, cached in session state."""
    try:
        config = build_config()
    except ValueError as e:
        st.error(f"❌ Invalid configuration: {e}")
        st.stop()
    cache_key = (config.workload, config.num_keys, config.prefix_freq, config.seed)
    if st.session_state.get('tree_key') != cache_key:
        tree = RadixTree()
        for i, k in enumerate(make_keys(config)):
            tree.insert(k, i)
        st.session_state['tree'] = tree
        st.session_state['tree_key'] = cache_key
    return st.session_state['tree']


# Main content area
if page == "Home":
    st.header("Welcome to RadixBench")

    st.markdown("""
    A compressed trie keyed by strings, with tooling to measure and explore it:

    **Key Features:**
    - ⏱️ Per-operation timings over generated workloads
    - 🔍 Exact lookup, longest-prefix match and prefix collection
    - 🌐 Routing-table lookups over bit-string encoded IPv4 prefixes
    - 📊 Tree shape statistics (node count, branching factor)
    """)

    tree = get_tree()
    stats = tree_stats(tree)
    top_key, _, _ = tree.top()
    bottom_key, _, _ = tree.bottom()

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Keys", f"{stats['keys']:,}")

    with col2:
        st.metric("Nodes", f"{stats['nodes']:,}")

    with col3:
        st.metric("Avg Branch Factor", f"{stats['avg_branch_factor']:.2f}")

    with col4:
        st.metric("Nodes per Key", f"{stats['nodes'] / max(stats['keys'], 1):.2f}")

    st.write(f"**Smallest key:** `{top_key}`")
    st.write(f"**Largest key:** `{bottom_key}`")

elif page == "Benchmark":
    st.header("⏱️ Benchmark")

    col1, col2 = st.columns(2)
    with col1:
        repeats = st.number_input("Repeats", min_value=1, max_value=20, value=3)
    with col2:
        lookup_sample = st.number_input("Lookup sample", min_value=1, max_value=100_000, value=1_000, step=100)

    if st.button("▶️ Run benchmark"):
        try:
            config = build_config(repeats=int(repeats), lookup_sample=int(lookup_sample))
        except ValueError as e:
            st.error(f"❌ Invalid configuration: {e}")
            st.stop()
        with st.spinner("Running..."):
            df, stats = run_benchmark(config)
        st.session_state['bench'] = df
        st.session_state['bench_stats'] = stats

    if 'bench' in st.session_state:
        df = st.session_state['bench']
        stats = st.session_state['bench_stats']

        st.success(f"✅ {stats['keys']:,} keys in {stats['nodes']:,} nodes")
        st.dataframe(df, use_container_width=True)

        fig = px.bar(df, x="operation", y="per_op_us", title="Median cost per call (µs)")
        st.plotly_chart(fig, use_container_width=True)

        fig_spread = go.Figure()
        fig_spread.add_trace(go.Bar(x=df["operation"], y=df["p50_us"], name="p50"))
        fig_spread.add_trace(go.Bar(x=df["operation"], y=df["p95_us"], name="p95"))
        fig_spread.update_layout(barmode="group", title="Per-call cost across repeats", yaxis_title="µs")
        st.plotly_chart(fig_spread, use_container_width=True)

        history = st.session_state.setdefault('bench_history', [])
        st.caption(f"{len(history)} earlier run(s) kept for comparison")
        if st.button("📌 Keep this run"):
            history.append(df.assign(run=len(history) + 1))
        if history:
            hist_df = pd.concat(history, ignore_index=True)
            fig_hist = px.line(hist_df, x="run", y="per_op_us", color="operation", markers=True,
                               title="Per-call cost by kept run")
            st.plotly_chart(fig_hist, use_container_width=True)
    else:
        st.info("👆 Configure the workload in the sidebar and run the benchmark")

elif page == "Explore Tree":
    st.header("🔍 Explore Tree")

    tree = get_tree()
    tab1, tab2, tab3 = st.tabs(["Lookup", "Prefix Collection", "Key Lengths"])

    with tab1:
        query = st.text_input("Key")
        if query:
            value, found = tree.get(query)
            if found:
                st.success(f"Exact match → {value!r}")
            else:
                st.warning("No exact match")
            match, value, found = tree.longest_match(query)
            if found:
                st.write(f"**Longest stored prefix:** `{match}` → {value!r}")
            else:
                st.write("No stored key is a prefix of this query")

    with tab2:
        prefix = st.text_input("Prefix", key="prefix")
        limit = st.number_input("Limit", min_value=1, max_value=10_000, value=100)
        rows = list(tree.items(prefix, k=int(limit)))
        st.write(f"**{len(rows)} key(s)** (showing up to {int(limit)})")
        st.dataframe(pd.DataFrame(rows, columns=["key", "value"]), use_container_width=True)

    with tab3:
        lengths = np.fromiter((len(k) for k in tree), dtype=int, count=len(tree))
        if lengths.size:
            fig_len = px.histogram(x=lengths, title="Distribution of key lengths")
            fig_len.update_layout(xaxis_title="Characters", yaxis_title="Keys")
            st.plotly_chart(fig_len, use_container_width=True)
        else:
            st.info("Tree is empty")

elif page == "Routing Table":
    st.header("🌐 Routing Table")

    st.markdown("Routes are stored as the first *prefixlen* bits of the network address; "
                "a lookup returns the most specific route containing the address.")

    num_routes = st.number_input("Number of routes", min_value=1, max_value=50_000, value=1_000, step=100)
    try:
        gen = RouteGenerator(RouteConfig(seed=int(seed)))
    except ValueError as e:
        st.error(f"❌ Invalid configuration: {e}")
        st.stop()

    routes = RadixTree()
    for i, cidr in enumerate(gen.batch(int(num_routes))):
        routes.insert(cidr_to_bits(cidr), f"{cidr} via gig{i}")

    address = st.text_input("IPv4 address", value=gen.address())
    if address:
        try:
            bits = ip_to_bits(address)
        except ValueError as e:
            st.error(f"❌ {e}")
        else:
            _, route, found = routes.longest_match(bits)
            if found:
                st.success(f"✅ {address} → {route}")
            else:
                st.warning(f"No route for {address}")

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | RadixBench
    </div>
    """,
    unsafe_allow_html=True
)
