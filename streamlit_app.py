"""Streamlit Web UI for freelanly.

Pages:
  Dashboard, Clients, Projects, Documents  : the freelancer's business records
  Resume Builder, Saved Resumes            : the multi-step resume wizard
  Cover Letter                             : model-written letter from the current draft
  Reports                                  : generation usage for this month
  Settings                                 : the profile used to pre-fill resumes
"""

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Streamlit Cloud: sync st.secrets → os.environ so backend clients can read them
for key in ("ANTHROPIC_API_KEY", "FREELANLY_USER"):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from freelanly.clients.llm_client import LLMClient
from freelanly.config import load_config
from freelanly.documents.assembly import DocumentAssemblyService
from freelanly.documents.cover_letter import CoverLetterWriter
from freelanly.errors import FreelanlyError, ValidationError
from freelanly.export.clipboard import export_to_clipboard
from freelanly.export.pdf_exporter import render_pdf_bytes
from freelanly.export.preview import render_html_preview
from freelanly.logging.usage_store import UsageStore
from freelanly.models.business import ProjectStatus
from freelanly.models.documents import DocumentKind
from freelanly.models.session import UserSession
from freelanly.storage import BusinessStore, Database, ProfileStore, ResumeStore
from freelanly.wizard.session import WizardSession

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Freelanly",
    page_icon=":briefcase:",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Password gate
# ---------------------------------------------------------------------------

try:
    APP_PASSWORD = st.secrets["APP_PASSWORD"]
except Exception:
    APP_PASSWORD = os.environ.get("APP_PASSWORD", "freelanly")

if "authenticated" not in st.session_state:
    st.session_state.authenticated = False

if not st.session_state.authenticated:
    st.markdown("## Freelanly")
    pw = st.text_input("Password", type="password")
    if pw and pw == APP_PASSWORD:
        st.session_state.authenticated = True
        st.rerun()
    elif pw:
        st.error("Wrong password")
    st.stop()

# ---------------------------------------------------------------------------
# Shared services
# ---------------------------------------------------------------------------

config = load_config()


@st.cache_resource
def _get_stores() -> tuple[BusinessStore, ResumeStore, ProfileStore, UsageStore]:
    db = Database(config.storage.resolved_db_path)
    return (
        BusinessStore(db),
        ResumeStore(db),
        ProfileStore(db),
        UsageStore(config.storage.resolved_usage_db_path),
    )


def _get_writer() -> CoverLetterWriter | None:
    try:
        llm = LLMClient(timeout=config.llm.timeout, max_attempts=config.llm.max_attempts)
    except Exception:
        logger.exception("LLM client init failed")
        return None
    return CoverLetterWriter(
        llm,
        config.llm.model,
        max_projects=config.cover_letter.max_projects,
        max_words=config.cover_letter.max_words,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
    )


business, resumes, profiles, usage = _get_stores()

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

PAGES = [
    "Dashboard",
    "Clients",
    "Projects",
    "Documents",
    "Resume Builder",
    "Saved Resumes",
    "Cover Letter",
    "Reports",
    "Settings",
]

with st.sidebar:
    st.title("Freelanly")
    st.caption("Clients, projects and paperwork in one place")

    display_name = st.text_input("Your name", value=st.session_state.get("display_name", ""))
    st.session_state.display_name = display_name

    if "nav_target" in st.session_state:
        st.session_state.page = st.session_state.pop("nav_target")
    elif "page" not in st.session_state:
        st.session_state.page = PAGES[0]
    page = st.radio("Go to", PAGES, key="page")

    st.divider()
    if st.button("Log out"):
        for key in list(st.session_state.keys()):
            del st.session_state[key]
        st.rerun()

session = UserSession(
    user_id=os.environ.get("FREELANLY_USER", "default"),
    display_name=display_name,
)

if "wizard" not in st.session_state:
    st.session_state.wizard = WizardSession(
        session,
        resumes,
        DocumentAssemblyService(business, resumes, _get_writer(), usage),
        profile_fetcher=profiles.fetch,
        profile_fetch_enabled=config.profile.fetch_enabled,
    )
wizard: WizardSession = st.session_state.wizard
wizard.user = session
assembly = wizard.assembly


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _show_error(e: FreelanlyError) -> None:
    if isinstance(e, ValidationError):
        fields = f" ({', '.join(e.fields)})" if e.fields else ""
        st.warning(f"{e}{fields}")
    else:
        logger.warning("Action failed: %s", e)
        st.error(str(e))


def _export_controls(body: str, base_name: str, key: str) -> None:
    """PDF download plus a copyable text block."""
    cols = st.columns(2)
    with cols[0]:
        try:
            pdf_bytes = render_pdf_bytes(body, config.export)
        except FreelanlyError as e:
            _show_error(e)
        else:
            st.download_button(
                label="Download PDF",
                data=pdf_bytes,
                file_name=f"{base_name}.pdf",
                mime="application/pdf",
                key=f"pdf-{key}",
            )
    with cols[1]:
        if st.button("Copy text", key=f"copy-{key}"):
            try:
                export_to_clipboard(body, lambda text: st.code(text, language=None))
            except FreelanlyError as e:
                _show_error(e)
            else:
                st.toast("Use the copy icon on the text block")


def _client_label(client_id: int) -> str:
    try:
        return business.get_client(session, client_id).name
    except FreelanlyError:
        return f"#{client_id}"


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


def _page_dashboard():
    st.header("Dashboard")
    stats = business.dashboard_stats(session)
    cols = st.columns(4)
    cols[0].metric("Active clients", stats.active_clients)
    cols[1].metric("Ongoing projects", stats.ongoing_projects)
    cols[2].metric("Revenue (paid)", f"${stats.paid_revenue:,.2f}")
    cols[3].metric("Documents", stats.documents_generated)

    st.subheader("Upcoming deadlines")
    upcoming = sorted(
        (p for p in business.list_projects(session) if p.deadline and p.status != ProjectStatus.COMPLETED),
        key=lambda p: p.deadline,
    )[:5]
    if not upcoming:
        st.caption("Nothing due.")
    for p in upcoming:
        st.markdown(f"- **{p.name}** for {_client_label(p.client_id)}: {p.deadline:%Y-%m-%d} ({p.status.value})")


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


def _page_clients():
    st.header("Clients")
    with st.expander("Add client", expanded=False):
        with st.form("add-client", clear_on_submit=True):
            name = st.text_input("Name")
            email = st.text_input("Email")
            company = st.text_input("Company")
            language = st.text_input("Language")
            if st.form_submit_button("Add", type="primary"):
                try:
                    business.create_client(
                        session,
                        {"name": name, "email": email, "company": company or None, "language": language or None},
                    )
                    st.rerun()
                except FreelanlyError as e:
                    _show_error(e)

    for client in business.list_clients(session):
        with st.container(border=True):
            cols = st.columns([4, 1])
            cols[0].markdown(
                f"**{client.name}** · {client.email}"
                + (f" · {client.company}" if client.company else "")
                + (f" · {client.language}" if client.language else "")
            )
            if cols[1].button("Delete", key=f"del-client-{client.id}"):
                try:
                    business.delete_client(session, client.id)
                    st.rerun()
                except FreelanlyError as e:
                    _show_error(e)
            with st.expander("Edit"):
                with st.form(f"edit-client-{client.id}"):
                    changes = {
                        "name": st.text_input("Name", value=client.name, key=f"edit-name-{client.id}"),
                        "email": st.text_input("Email", value=client.email, key=f"edit-email-{client.id}"),
                        "company": st.text_input("Company", value=client.company or "", key=f"edit-company-{client.id}") or None,
                        "language": st.text_input("Language", value=client.language or "", key=f"edit-language-{client.id}") or None,
                    }
                    if st.form_submit_button("Save"):
                        try:
                            business.update_client(session, client.id, changes)
                            st.rerun()
                        except FreelanlyError as e:
                            _show_error(e)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


def _page_projects():
    st.header("Projects")
    clients = business.list_clients(session)
    if not clients:
        st.info("Add a client first.")
        return
    client_names = {c.id: c.name for c in clients}
    statuses = [s.value for s in ProjectStatus]

    with st.expander("Add project", expanded=False):
        with st.form("add-project", clear_on_submit=True):
            client_id = st.selectbox("Client", list(client_names), format_func=client_names.get)
            name = st.text_input("Project name")
            description = st.text_area("Description")
            amount = st.number_input("Amount ($)", min_value=0.0, step=50.0)
            deadline = st.date_input("Deadline", value=None)
            status = st.selectbox("Status", statuses)
            if st.form_submit_button("Add", type="primary"):
                try:
                    business.create_project(
                        session,
                        {
                            "client_id": client_id,
                            "name": name,
                            "description": description or None,
                            "amount": amount,
                            "deadline": datetime.combine(deadline, datetime.min.time()) if deadline else None,
                            "status": status,
                        },
                    )
                    st.rerun()
                except FreelanlyError as e:
                    _show_error(e)

    for project in business.list_projects(session):
        with st.container(border=True):
            st.markdown(
                f"**{project.name}** for {client_names.get(project.client_id, project.client_id)}"
                + (f" · ${project.amount:,.2f}" if project.amount is not None else "")
                + (f" · due {project.deadline:%Y-%m-%d}" if project.deadline else "")
            )
            if project.description:
                st.caption(project.description)
            cols = st.columns([2, 2, 1])
            new_status = cols[0].selectbox(
                "Status",
                statuses,
                index=statuses.index(project.status.value),
                key=f"status-{project.id}",
            )
            invoice_sent = cols[1].checkbox(
                "Invoice sent",
                value=project.invoice_sent,
                disabled=project.status == ProjectStatus.IN_PROGRESS,
                key=f"sent-{project.id}",
            )
            changes = {}
            if new_status != project.status.value:
                changes["status"] = new_status
            if invoice_sent != project.invoice_sent:
                changes["invoice_sent"] = invoice_sent
            if changes:
                try:
                    business.update_project(session, project.id, changes)
                    st.rerun()
                except FreelanlyError as e:
                    _show_error(e)
            if cols[2].button("Delete", key=f"del-project-{project.id}"):
                business.delete_project(session, project.id)
                st.rerun()


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def _page_documents():
    st.header("Documents")
    projects = business.list_projects(session)
    if projects:
        project_names = {p.id: p.name for p in projects}
        cols = st.columns([3, 2, 1])
        project_id = cols[0].selectbox("Project", list(project_names), format_func=project_names.get)
        kind = cols[1].selectbox("Type", [DocumentKind.INVOICE, DocumentKind.CONTRACT], format_func=lambda k: k.value.title())
        if cols[2].button("Generate", type="primary"):
            try:
                asyncio.run(assembly.generate(kind, project_id, session))
                st.rerun()
            except FreelanlyError as e:
                _show_error(e)
    else:
        st.info("Add a project to generate invoices and contracts.")

    for document in business.list_documents(session):
        title = f"{document.kind.marker} #{document.id} · {document.created_at:%Y-%m-%d %H:%M}"
        with st.expander(title):
            content = st.text_area("Content", value=document.content, height=300, key=f"doc-{document.id}")
            cols = st.columns(2)
            if content != document.content and cols[0].button("Save changes", key=f"save-doc-{document.id}"):
                business.update_document_content(session, document.id, content)
                st.rerun()
            if cols[1].button("Delete", key=f"del-doc-{document.id}"):
                business.delete_document(session, document.id)
                st.rerun()
            _export_controls(content, f"{document.kind.value}-{document.id}", f"doc-{document.id}")


# ---------------------------------------------------------------------------
# Resume Builder
# ---------------------------------------------------------------------------


def _step_basic_info():
    section = wizard.sections["basic-info"]
    if config.profile.fetch_enabled and st.button("Fill from profile"):
        try:
            wizard.prefill_profile()
            st.rerun()
        except FreelanlyError as e:
            _show_error(e)
    info = section.read(wizard.store)
    cols = st.columns(2)
    values = {
        "name": cols[0].text_input("Full name *", value=info.name),
        "email": cols[1].text_input("Email *", value=info.email),
        "phone": cols[0].text_input("Phone", value=info.phone),
        "location": cols[1].text_input("Location", value=info.location),
        "website": cols[0].text_input("Website", value=info.website),
        "professional_title": cols[1].text_input("Professional title *", value=info.professional_title),
        "summary": st.text_area("Professional summary", value=info.summary),
    }
    return values


def _step_projects():
    section = wizard.sections["project-selection"]
    projects = business.list_projects(session)
    if not projects:
        st.caption("No projects yet. You can skip this step.")
    selected_ids = {p.id for p in section.read(wizard.store).selected_projects}
    for project in projects:
        checked = st.checkbox(project.name, value=project.id in selected_ids, key=f"pick-{project.id}")
        if checked != (project.id in selected_ids):
            section.toggle_project(wizard.sequencer, project)
            st.rerun()
    return None


def _step_skills():
    section = wizard.sections["skills-experience"]
    record = section.read(wizard.store)

    st.subheader("Skills *")
    cols = st.columns([4, 1])
    skill = cols[0].text_input("Add a skill", key="new-skill")
    if cols[1].button("Add", key="add-skill") and section.add_skill(wizard.sequencer, skill):
        st.rerun()
    for i, s in enumerate(record.skills):
        c = st.columns([4, 1])
        c[0].markdown(f"- {s}")
        if c[1].button("Remove", key=f"rm-skill-{i}"):
            section.remove(wizard.sequencer, "skills", i)
            st.rerun()

    st.subheader("Languages")
    cols = st.columns([2, 2, 1])
    language = cols[0].text_input("Language", key="new-language")
    level = cols[1].selectbox("Level", ["Native", "Fluent", "Advanced", "Intermediate", "Basic"], key="new-level")
    if cols[2].button("Add", key="add-language") and section.add_language(wizard.sequencer, language, level):
        st.rerun()
    for i, entry in enumerate(record.languages):
        c = st.columns([4, 1])
        c[0].markdown(f"- {entry.language} ({entry.level})")
        if c[1].button("Remove", key=f"rm-lang-{i}"):
            section.remove(wizard.sequencer, "languages", i)
            st.rerun()

    st.subheader("Experience")
    with st.form("add-experience", clear_on_submit=True):
        c = st.columns(2)
        entry = {
            "role": c[0].text_input("Role"),
            "company": c[1].text_input("Company"),
            "start_date": c[0].text_input("Start"),
            "end_date": c[1].text_input("End"),
            "description": st.text_area("Description"),
        }
        if st.form_submit_button("Add experience"):
            try:
                if section.add_experience(wizard.sequencer, entry):
                    st.rerun()
            except FreelanlyError as e:
                _show_error(e)
    for i, e in enumerate(record.experience):
        c = st.columns([4, 1])
        c[0].markdown(f"- **{e.role}**, {e.company} {e.start_date}–{e.end_date}")
        if c[1].button("Remove", key=f"rm-exp-{i}"):
            section.remove(wizard.sequencer, "experience", i)
            st.rerun()

    st.subheader("Education")
    with st.form("add-education", clear_on_submit=True):
        c = st.columns(3)
        entry = {
            "degree": c[0].text_input("Degree"),
            "institution": c[1].text_input("Institution"),
            "year": c[2].text_input("Year"),
        }
        if st.form_submit_button("Add education"):
            try:
                if section.add_education(wizard.sequencer, entry):
                    st.rerun()
            except FreelanlyError as e:
                _show_error(e)
    for i, e in enumerate(record.education):
        c = st.columns([4, 1])
        c[0].markdown(f"- **{e.degree}**, {e.institution} {e.year}")
        if c[1].button("Remove", key=f"rm-edu-{i}"):
            section.remove(wizard.sequencer, "education", i)
            st.rerun()
    return None


def _step_target():
    target = wizard.sections["target-position"].read(wizard.store)
    cols = st.columns(2)
    return {
        "target_position": cols[0].text_input("Target position *", value=target.target_position),
        "target_company": cols[1].text_input("Target company", value=target.target_company),
        "job_description": st.text_area("Job description", value=target.job_description, height=200),
    }


def _step_preview():
    settings = wizard.sections["preview-export"].read(wizard.store)
    templates = ["professional", "modern", "minimal"]
    template = st.selectbox(
        "Template",
        templates,
        index=templates.index(settings.template) if settings.template in templates else 0,
    )
    if st.button("Build preview", disabled=wizard.pending.is_pending("generate")):
        try:
            st.session_state.resume_doc = wizard.generate_resume()
        except FreelanlyError as e:
            _show_error(e)
    document = st.session_state.get("resume_doc")
    if document is not None:
        components.html(render_html_preview(document.body, title="Resume"), height=500, scrolling=True)
        _export_controls(document.body, "resume", "resume")

    st.subheader("Save")
    name = st.text_input("Resume name", value=st.session_state.get("resume_name", ""))
    if st.button("Save resume", type="primary", disabled=wizard.pending.is_pending("save")):
        try:
            saved = wizard.save(name)
            st.session_state.resume_name = saved.name
            st.success(f"Saved '{saved.name}'")
        except FreelanlyError as e:
            _show_error(e)
    return {"template": template}


def _step_cover_letter():
    _cover_letter_panel()
    return None


STEP_RENDERERS = {
    "basic-info": _step_basic_info,
    "project-selection": _step_projects,
    "skills-experience": _step_skills,
    "target-position": _step_target,
    "preview-export": _step_preview,
    "cover-letter": _step_cover_letter,
}


def _page_resume_builder():
    st.header("Resume Builder")
    sequencer = wizard.sequencer

    cols = st.columns(len(sequencer.steps))
    for i, step in enumerate(sequencer.steps):
        label = ("✓ " if sequencer.state.completed[i] else "") + step.label
        if cols[i].button(label, key=f"goto-{i}", type="primary" if i == sequencer.current else "secondary"):
            if sequencer.go_to_step(i):
                st.rerun()
            else:
                st.warning("Complete the earlier steps first.")
    st.progress(sequencer.progress)

    step = sequencer.current_step
    st.subheader(step.label)
    values = STEP_RENDERERS[step.id]()

    nav = st.columns([1, 1, 4])
    if nav[0].button("Back", disabled=sequencer.current == 0):
        sequencer.previous_step()
        st.rerun()
    last = sequencer.current == len(sequencer.steps) - 1
    if nav[1].button("Finish" if last else "Next", type="primary"):
        try:
            if values is not None:
                wizard.current_section.submit(sequencer, values)
            if sequencer.next_step():
                st.rerun()
            else:
                st.warning(f"Please fill in: {', '.join(sequencer.missing_fields())}")
        except FreelanlyError as e:
            _show_error(e)
    if sequencer.is_complete:
        st.success("All steps complete.")
    if nav[2].button("Start over"):
        wizard.reset()
        st.session_state.pop("resume_name", None)
        st.session_state.pop("resume_doc", None)
        st.rerun()


# ---------------------------------------------------------------------------
# Saved resumes
# ---------------------------------------------------------------------------


def _page_saved_resumes():
    st.header("Saved Resumes")
    saved = resumes.list_resumes(session)
    if not saved:
        st.info("No saved resumes yet. Build one in the Resume Builder.")
        return
    for resume in saved:
        with st.expander(f"{resume.name} · {resume.specialization} · {resume.updated_at:%Y-%m-%d}"):
            st.text(resume.content)
            cols = st.columns(2)
            if cols[0].button("Open in builder", key=f"open-{resume.id}"):
                try:
                    wizard.load_saved(resume.id)
                except FreelanlyError as e:
                    _show_error(e)
                else:
                    st.session_state.resume_name = resume.name
                    st.session_state.pop("resume_doc", None)
                    st.session_state.nav_target = "Resume Builder"
                    st.rerun()
            if cols[1].button("Delete", key=f"del-resume-{resume.id}"):
                resumes.delete(session, resume.id)
                if wizard.resume_id == resume.id:
                    wizard.resume_id = None
                st.rerun()
            _export_controls(resume.content, resume.name.replace(" ", "_"), f"resume-{resume.id}")


# ---------------------------------------------------------------------------
# Cover letter
# ---------------------------------------------------------------------------


def _cover_letter_panel():
    draft = wizard.draft()
    if not (draft.target_position and draft.target_company):
        st.info("Set a target position and company in the Resume Builder first.")
    st.markdown(
        f"**{draft.target_position or '?'}** at **{draft.target_company or '?'}**"
        f" · {len(draft.selected_projects)} selected project(s)"
    )
    if st.button("Generate cover letter", type="primary", disabled=wizard.pending.is_pending("generate")):
        with st.spinner("Writing cover letter..."):
            try:
                asyncio.run(wizard.generate_cover_letter())
                st.rerun()
            except FreelanlyError as e:
                _show_error(e)

    letter = wizard.draft().cover_letter
    if letter:
        edited = st.text_area("Cover letter", value=letter, height=400)
        if edited != letter:
            wizard.sections["cover-letter"].submit(wizard.sequencer, {"cover_letter": edited})
        _export_controls(edited, "cover_letter", "cover-letter")


def _page_cover_letter():
    st.header("Cover Letter")
    _cover_letter_panel()


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


def _page_reports():
    st.header("Reports")
    stats = usage.get_monthly_stats(session.user_id)
    cols = st.columns(4)
    cols[0].metric("Generations", stats["total_runs"])
    cols[1].metric("Success rate", f"{stats['success_rate']:.0f}%")
    cols[2].metric("Tokens", stats["total_input_tokens"] + stats["total_output_tokens"])
    cols[3].metric("Est. cost", f"${stats['total_cost_usd']:.4f}")
    if stats["by_kind"]:
        st.bar_chart(
            [{"kind": kind, "runs": count} for kind, count in stats["by_kind"].items()],
            x="kind",
            y="runs",
        )

    st.subheader("Recent activity")
    logs = usage.get_logs(session.user_id, limit=50)
    if not logs:
        st.caption("No activity this month.")
        return
    st.dataframe(
        [
            {
                "time": log.timestamp.strftime("%Y-%m-%d %H:%M"),
                "kind": log.kind,
                "source": log.source_id or "",
                "ok": log.success,
                "tokens": log.total_input_tokens + log.total_output_tokens,
                "cost": round(log.estimated_cost_usd, 4),
                "error": log.error_message or "",
            }
            for log in logs
        ],
        use_container_width=True,
    )


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def _page_settings():
    st.header("Settings")
    st.subheader("Profile")
    st.caption("Shown on your documents and used by \"Fill from profile\" in the Resume Builder.")
    if not config.profile.fetch_enabled:
        st.info("Profile pre-fill is off. Set profile.fetch_enabled in config.yaml to use it.")
    profile = profiles.get_profile(session)
    with st.form("profile"):
        cols = st.columns(2)
        values = {
            "name": cols[0].text_input("Full name", value=profile.name if profile else display_name),
            "email": cols[1].text_input("Email", value=profile.email if profile else ""),
            "phone": cols[0].text_input("Phone", value=profile.phone if profile else ""),
            "location": cols[1].text_input("Location", value=profile.location if profile else ""),
            "website": cols[0].text_input("Website", value=profile.website if profile else ""),
            "job_title": cols[1].text_input("Job title", value=profile.job_title if profile else ""),
        }
        if st.form_submit_button("Save profile", type="primary"):
            try:
                profiles.save_profile(session, values)
                st.success("Profile saved")
            except FreelanlyError as e:
                _show_error(e)


# ---------------------------------------------------------------------------
# Main router
# ---------------------------------------------------------------------------

ROUTES = {
    "Dashboard": _page_dashboard,
    "Clients": _page_clients,
    "Projects": _page_projects,
    "Documents": _page_documents,
    "Resume Builder": _page_resume_builder,
    "Saved Resumes": _page_saved_resumes,
    "Cover Letter": _page_cover_letter,
    "Reports": _page_reports,
    "Settings": _page_settings,
}

ROUTES[page]()
