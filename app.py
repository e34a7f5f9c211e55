"""
Planner - Clienti, prenotazioni e calendario occupazione.
App Streamlit locale con due file JSON come storage.
"""

from datetime import date

import streamlit as st

from config import CONFIG_DIR, DEFAULT_EURO_PRICE, MONTH_NAMES
from core.calendar_grid import reservation_months, year_overview
from core.errors import NotFoundError, PersistenceError, ValidationError
from core.models import LocalizedPrice, ReservationMeta
from core.pricing import breakdown_for, compute_breakdown, format_amount, format_breakdown, nights_label
from core.storage import JsonStorage
from core.store import ReservationFilter, ReservationStore
from reports.calendar_table import grid_title, styled_grid
from reports.summary import (
    client_summary,
    df_to_csv_bytes,
    df_to_excel_bytes,
    income_by_month,
    reservations_df,
)

st.set_page_config(
    page_title="Planner",
    page_icon="📅",
    layout="wide",
)

st.title("📅 Planner prenotazioni")


@st.cache_resource
def get_store() -> ReservationStore:
    """Store unico per tutta la sessione: carica i JSON una sola volta."""
    return ReservationStore(JsonStorage())


try:
    store = get_store()
except PersistenceError as e:
    # Meglio fermarsi che ripartire da vuoto e sovrascrivere i dati esistenti
    st.error(f"Impossibile leggere i dati: {e}")
    st.stop()


with st.sidebar:
    st.header("Archivio")
    st.caption(f"Cartella dati: `{CONFIG_DIR}`")
    st.metric("Clienti", len(store.clients))
    st.metric("Prenotazioni", len(store.reservations))


def month_label(m: int) -> str:
    return MONTH_NAMES[m].capitalize()


def show_grids(grids, columns: int = 2):
    cols = st.columns(columns)
    for idx, grid in enumerate(grids):
        with cols[idx % columns]:
            st.caption(grid_title(grid, with_year=True))
            st.markdown(styled_grid(grid).to_html(), unsafe_allow_html=True)


# ── Tabs ─────────────────────────────────────────────────────────────────────
tab_res, tab_clients, tab_calendar, tab_new = st.tabs(
    ["📋 Prenotazioni", "👤 Clienti", "🗓️ Calendario", "➕ Nuova prenotazione"]
)


# ============================================================
# TAB 1: PRENOTAZIONI
# ============================================================
with tab_res:
    st.header("Prenotazioni")

    if not store.reservations:
        st.info("Nessuna prenotazione.")
    else:
        col1, col2, col3 = st.columns(3)
        with col1:
            sel_years = st.multiselect("Anno", store.available_years())
        with col2:
            sel_months = st.multiselect("Mese", store.available_months(), format_func=month_label)
        with col3:
            sel_clients = st.multiselect(
                "Cliente", store.available_clients(), format_func=lambda c: c.name
            )

        criteria = ReservationFilter(
            years=set(sel_years),
            months=set(sel_months),
            client_ids={c.id for c in sel_clients},
        )
        filtered = store.filter(criteria)

        try:
            df = reservations_df(store, filtered)
        except ValidationError as e:
            st.error(f"Errore nel calcolo prezzi: {e}")
            st.stop()

        # KPI
        k1, k2, k3, k4 = st.columns(4)
        k1.metric("Prenotazioni", len(df))
        k2.metric("Incasso PLN", format_amount(df["incasso_pln"].sum()) if not df.empty else "—")
        k3.metric("Incasso EUR", format_amount(df["incasso_eur"].sum()) if not df.empty else "—")
        k4.metric("Notti", int(df["notti"].sum()) if not df.empty else "—")

        if not df.empty:
            st.subheader("Incasso per mese di arrivo")
            st.dataframe(income_by_month(df).round(2), use_container_width=True)

        st.divider()

        for r in filtered:
            client = store.find_client(r)
            name = client.name if client else "N/D"
            b = breakdown_for(r)
            title = f"{name} — {r.start.strftime('%d.%m.%Y')} → {r.end.strftime('%d.%m.%Y')}"

            with st.expander(title):
                c_info, c_price = st.columns([1, 2])
                with c_info:
                    st.write(nights_label(b.days, r.meta.add_cleaning_time))
                    st.checkbox("Giorno per la pulizia", r.meta.add_cleaning_time, disabled=True, key=f"ct_{r.id}")
                    st.checkbox("Costo pulizia", r.meta.add_cleaning_cost, disabled=True, key=f"cc_{r.id}")
                    st.checkbox("Consegna chiavi", r.meta.keys_included, disabled=True, key=f"k_{r.id}")
                    st.write(f"Cambio euro: {r.meta.euro_price}")
                    if r.notes:
                        st.caption("Note")
                        st.write(r.notes)
                with c_price:
                    st.code(format_breakdown(b.pln) + "\n" + format_breakdown(b.euro))

                show_grids(reservation_months(r))

                if st.button("🗑️ Elimina prenotazione", key=f"del_res_{r.id}"):
                    st.session_state["confirm_delete"] = r.id
                    st.rerun()

        # ── Conferma eliminazione ──
        pending = st.session_state.get("confirm_delete")
        if pending is not None:
            try:
                r = store.get_reservation(pending)
            except NotFoundError:
                # già eliminata in un altro rerun
                st.session_state.pop("confirm_delete")
            else:
                st.warning(
                    f"Eliminare la prenotazione dal {r.start.strftime('%d.%m.%Y')} "
                    f"al {r.end.strftime('%d.%m.%Y')}?"
                )
                col_yes, col_no = st.columns(2)
                if col_yes.button("Conferma", key="confirm_delete_yes"):
                    try:
                        store.remove_reservation(r)
                        st.session_state.pop("confirm_delete")
                        st.rerun()
                    except PersistenceError as e:
                        st.error(f"Errore salvataggio: {e}")
                if col_no.button("Annulla", key="confirm_delete_no"):
                    st.session_state.pop("confirm_delete")
                    st.rerun()

        # ── Export ──
        if not df.empty:
            st.divider()
            st.subheader("Esporta")
            col_csv, col_xlsx = st.columns(2)
            with col_csv:
                st.download_button(
                    "⬇️ Scarica CSV",
                    df_to_csv_bytes(df),
                    file_name="prenotazioni.csv",
                    mime="text/csv",
                )
            with col_xlsx:
                st.download_button(
                    "⬇️ Scarica Excel",
                    df_to_excel_bytes(df),
                    file_name="prenotazioni.xlsx",
                    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                )


# ============================================================
# TAB 2: CLIENTI
# ============================================================
with tab_clients:
    st.header("Clienti")

    with st.form("add_client", clear_on_submit=True):
        new_name = st.text_input("Nome")
        if st.form_submit_button("Aggiungi cliente"):
            try:
                store.check_client_name(new_name)
                store.add_client(store.new_client(new_name))
                st.success(f"✓ Cliente '{new_name}' aggiunto. Puoi creare subito una prenotazione.")
            except ValidationError as e:
                st.error(str(e))
            except PersistenceError as e:
                st.error(f"Errore salvataggio: {e}")

    if not store.clients:
        st.info("Nessun cliente.")
    else:
        this_year = date.today().year
        st.dataframe(client_summary(store, this_year), use_container_width=True, hide_index=True)

        for c in store.clients:
            col_name, col_count, col_del = st.columns([3, 3, 1])
            col_name.write(f"**{c.name}**")
            col_count.caption(
                f"Prenotazioni: {store.reservation_count(c)} "
                f"({store.reservation_count(c, this_year)} quest'anno)"
            )
            if col_del.button("🗑️", key=f"del_client_{c.id}", help="Elimina cliente e sue prenotazioni"):
                try:
                    store.remove_client(c)
                    st.rerun()
                except PersistenceError as e:
                    st.error(f"Errore salvataggio: {e}")


# ============================================================
# TAB 3: CALENDARIO
# ============================================================
with tab_calendar:
    st.header("Occupazione")

    year = st.number_input("Anno", min_value=1900, max_value=2999, value=date.today().year, step=1)
    grids = year_overview(int(year), store.taken_days)

    for row_start in range(0, 12, 4):
        cols = st.columns(4)
        for col, grid in zip(cols, grids[row_start:row_start + 4]):
            with col:
                st.caption(grid_title(grid))
                st.markdown(styled_grid(grid).to_html(), unsafe_allow_html=True)


# ============================================================
# TAB 4: NUOVA PRENOTAZIONE
# ============================================================
with tab_new:
    st.header("Nuova prenotazione")

    if not store.clients:
        st.info("Aggiungi prima un cliente dal tab Clienti.")
    else:
        search = st.text_input("Cerca cliente", placeholder="Inizio del nome")
        candidates = store.clients_matching(search)
        if not candidates:
            st.warning(f"Nessun cliente il cui nome inizia con '{search}'.")
            st.stop()
        client = st.selectbox("Cliente", candidates, format_func=lambda c: c.name)

        st.subheader("Opzioni")
        col1, col2 = st.columns(2)
        with col1:
            euro_price = st.number_input(
                "Cambio euro (PLN per 1 €)", min_value=0.0001, value=DEFAULT_EURO_PRICE, format="%.4f"
            )
        with col2:
            add_cleaning_cost = st.checkbox("Costo pulizia?")
            keys_included = st.checkbox("Costo consegna chiavi?")
            add_cleaning_time = st.checkbox("Aggiungere un giorno per la pulizia?")

        st.subheader("Date")
        col1, col2 = st.columns(2)
        with col1:
            arrive = st.date_input("Arrivo", value=date.today())
        with col2:
            leave = st.date_input("Partenza", value=date.today())

        st.subheader("Prezzi")
        col1, col2 = st.columns(2)
        with col1:
            st.caption("Prezzo al giorno")
            ppd_pln = st.number_input("PLN", value=0.0, key="ppd_pln")
            ppd_eur = st.number_input("Euro", value=0.0, key="ppd_eur")
        with col2:
            st.caption("Importo aggiuntivo")
            price_pln = st.number_input("PLN", value=0.0, key="price_pln")
            price_eur = st.number_input("Euro", value=0.0, key="price_eur")

        notes = st.text_area("Note")

        try:
            meta = ReservationMeta(
                euro_price=euro_price,
                add_cleaning_cost=add_cleaning_cost,
                add_cleaning_time=add_cleaning_time,
                keys_included=keys_included,
            )
            price_per_day = LocalizedPrice(euro=ppd_eur, pln=ppd_pln)
            price = LocalizedPrice(euro=price_eur, pln=price_pln)

            b = compute_breakdown(meta, arrive, leave, price_per_day, price)
            st.write(nights_label(b.days, add_cleaning_time))
            st.code(format_breakdown(b.pln) + "\n" + format_breakdown(b.euro))

            if st.button("✅ Aggiungi prenotazione", type="primary"):
                reservation = store.new_reservation(
                    client, arrive, leave, meta, price_per_day, price, notes
                )
                store.add_reservation(reservation)
                st.success("✓ Prenotazione salvata.")
        except ValidationError as e:
            st.error(str(e))
        except (NotFoundError, PersistenceError) as e:
            st.error(f"Errore: {e}")
