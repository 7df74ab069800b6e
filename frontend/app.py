"""
Dash frontend application for the Disaster Risk Early Warning System.
"""

import dash
from dash import dcc, html, Input, Output, State, ALL, ctx, dash_table, no_update
import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
import os
from datetime import datetime
from typing import Dict, Any, List, Optional

from backend.logging_config import setup_logging
from frontend.api_client import BackendClient

# Initialize Dash app
app = dash.Dash(__name__, external_stylesheets=['https://codepen.io/chriddyp/pen/bWLwgP.css'])
app.title = "Disaster Risk Early Warning System"

client = BackendClient()

HIDDEN = {"display": "none"}
VISIBLE = {"display": "block"}


def format_timestamp(value: str) -> str:
    """Render an ISO timestamp as e.g. 'Jan 05, 2024 09:30'."""
    try:
        return datetime.fromisoformat(value.replace("Z", "")).strftime("%b %d, %Y %H:%M")
    except (AttributeError, ValueError):
        return str(value)


def add_created_task(tasks: List[Dict[str, Any]], new_task: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """New tasks go to the top of the list."""
    if not new_task:
        return tasks
    return [new_task] + tasks


def replace_updated_task(tasks: List[Dict[str, Any]], updated: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not updated:
        return tasks
    return [updated if task["id"] == updated["id"] else task for task in tasks]


def remove_deleted_task(tasks: List[Dict[str, Any]], task_id: int, result: Dict[str, bool]) -> List[Dict[str, Any]]:
    """Drop the task only when the backend confirmed the delete."""
    if not result.get("success"):
        return tasks
    return [task for task in tasks if task["id"] != task_id]


def render_task_card(task: Dict[str, Any]) -> html.Div:
    timestamps = [html.Span(f"Created: {format_timestamp(task['created_at'])}")]
    if task["updated_at"] != task["created_at"]:
        timestamps.append(html.Span(f" · Updated: {format_timestamp(task['updated_at'])}"))

    body = [
        html.Div([
            html.H5(task["title"], className="task-title"),
            html.Div([
                html.Button("Edit", id={"type": "edit-task", "index": task["id"]}, className="button"),
                html.Button("Delete", id={"type": "delete-task", "index": task["id"]}, className="button"),
            ], className="task-actions"),
        ], className="task-header"),
    ]
    if task.get("description"):
        body.append(html.P(task["description"], className="task-description"))
    body.append(html.Div(timestamps, className="task-timestamps"))

    return html.Div(body, className="task-card", id=f"task-card-{task['id']}")


def render_task_list(tasks: List[Dict[str, Any]]):
    if not tasks:
        return html.Div([
            html.H4("No tasks yet!"),
            html.P("Create your first task above to get started.")
        ], className="empty-state")
    return [render_task_card(task) for task in tasks]


def get_tasks_content():
    """Get task manager tab content."""
    return html.Div([
        # Create form
        html.Div([
            html.H4("Create New Task"),
            html.P("Add a new task to your list with a title and description"),
            html.Label("Task Title *", htmlFor="task-title"),
            dcc.Input(id="task-title", type="text", placeholder="Enter task title...", value="",
                      style={"width": "100%"}),
            html.Label("Description", htmlFor="task-description"),
            dcc.Textarea(id="task-description", placeholder="Enter task description...", value="",
                         style={"width": "100%", "minHeight": "100px"}),
            html.Button("Create Task", id="create-task-button", className="button-primary", disabled=True),
        ], className="task-form"),

        # Edit form
        html.Div([
            html.H4("Edit Task"),
            html.Label("Task Title *", htmlFor="edit-title"),
            dcc.Input(id="edit-title", type="text", value="", style={"width": "100%"}),
            html.Label("Description", htmlFor="edit-description"),
            dcc.Textarea(id="edit-description", value="", style={"width": "100%"}),
            html.Button("Save Changes", id="save-edit-button", className="button-primary"),
            html.Button("Cancel", id="cancel-edit-button", className="button"),
        ], id="edit-panel", className="task-form", style=HIDDEN),

        # Task list
        html.Div([
            html.H4(id="task-count", children="Your Tasks (0)"),
            html.Div(id="task-list")
        ], className="task-list-container"),

        dcc.ConfirmDialog(id="confirm-delete", message=""),
        dcc.Store(id="tasks-store", data=[]),
        dcc.Store(id="editing-task-id", data=None),
        dcc.Store(id="pending-delete-id", data=None),
    ])


def get_risk_report_content():
    """Get risk report tab content."""
    return html.Div([
        html.Div([
            html.H4("Flood & Landslide Risk Report"),
            html.P("District-level early warning predictions for the coming week"),

            # Filters
            html.Div([
                html.Label("District:"),
                dcc.Dropdown(id="report-district", placeholder="All districts...", style={"width": "300px"}),
                html.Label("Disaster type:"),
                dcc.Dropdown(
                    id="report-disaster-type",
                    options=[
                        {"label": "All types", "value": "all"},
                        {"label": "Flood", "value": "flood"},
                        {"label": "Landslide", "value": "landslide"}
                    ],
                    value="all",
                    style={"width": "200px"}
                ),
                html.Label("Risk level:"),
                dcc.Dropdown(
                    id="report-risk-level",
                    options=[
                        {"label": "All levels", "value": "all"},
                        {"label": "High", "value": "high"},
                        {"label": "Medium", "value": "medium"},
                        {"label": "Low", "value": "low"}
                    ],
                    value="all",
                    style={"width": "200px"}
                ),
            ], className="filters"),

            html.Div(id="report-summary", className="summary-cards"),
            dcc.Markdown(id="report-markdown"),
            html.Div(id="predictions-table"),
            html.H4("Daily Rainfall"),
            dcc.Graph(id="rainfall-chart"),
        ])
    ])


# App layout
app.layout = html.Div([
    # Header
    html.Div([
        html.H1("Disaster Risk Early Warning System", className="header-title"),
        html.P("Organize your tasks and follow district flood and landslide risk", className="header-subtitle"),
    ], className="header"),

    dcc.Tabs(id="main-tabs", value="tasks", children=[
        dcc.Tab(label="Tasks", value="tasks", children=get_tasks_content()),
        dcc.Tab(label="Risk Report", value="risk-report", children=get_risk_report_content()),
    ]),
])


def _filter_value(value):
    return None if value in (None, "all") else value


@app.callback(
    [Output("tasks-store", "data"),
     Output("task-title", "value"),
     Output("task-description", "value"),
     Output("editing-task-id", "data")],
    [Input("create-task-button", "n_clicks"),
     Input("save-edit-button", "n_clicks"),
     Input("confirm-delete", "submit_n_clicks")],
    [State("task-title", "value"),
     State("task-description", "value"),
     State("editing-task-id", "data"),
     State("edit-title", "value"),
     State("edit-description", "value"),
     State("pending-delete-id", "data"),
     State("tasks-store", "data")]
)
def sync_tasks(create_clicks, save_clicks, delete_submits, title, description,
               editing_id, edit_title, edit_description, pending_delete_id, tasks):
    return apply_task_action(ctx.triggered_id, title, description, editing_id,
                             edit_title, edit_description, pending_delete_id, tasks)


def apply_task_action(trigger, title, description, editing_id, edit_title,
                      edit_description, pending_delete_id, tasks):
    """
    Apply the create/update/delete action named by ``trigger`` to the task list.

    Returns the new task list, the create-form title and description, and the
    id of the task being edited. Any other trigger reloads the list.
    """
    tasks = tasks or []

    if trigger == "create-task-button":
        if not (title or "").strip():
            return no_update, no_update, no_update, no_update
        new_task = client.create_task(title, description or "")
        if new_task is None:
            return no_update, no_update, no_update, no_update
        return add_created_task(tasks, new_task), "", "", no_update

    if trigger == "save-edit-button":
        if editing_id is None or not (edit_title or "").strip():
            return no_update, no_update, no_update, no_update
        updated = client.update_task(editing_id, title=edit_title, description=edit_description or "")
        if updated is None:
            return no_update, no_update, no_update, no_update
        return replace_updated_task(tasks, updated), no_update, no_update, None

    if trigger == "confirm-delete":
        if pending_delete_id is None:
            return no_update, no_update, no_update, no_update
        result = client.delete_task(pending_delete_id)
        return remove_deleted_task(tasks, pending_delete_id, result), no_update, no_update, no_update

    # Initial page load
    return client.get_tasks(), no_update, no_update, no_update


@app.callback(
    [Output("editing-task-id", "data", allow_duplicate=True),
     Output("edit-title", "value"),
     Output("edit-description", "value")],
    [Input({"type": "edit-task", "index": ALL}, "n_clicks"),
     Input("cancel-edit-button", "n_clicks")],
    [State("tasks-store", "data")],
    prevent_initial_call=True
)
def open_editor(edit_clicks, cancel_clicks, tasks):
    """Prefill the edit form with the chosen task."""
    if ctx.triggered_id == "cancel-edit-button":
        return None, "", ""
    if not ctx.triggered or not ctx.triggered[0]["value"]:
        return no_update, no_update, no_update

    task_id = ctx.triggered_id["index"]
    task = next((t for t in tasks or [] if t["id"] == task_id), None)
    if task is None:
        return no_update, no_update, no_update
    return task["id"], task["title"], task["description"]


@app.callback(
    Output("edit-panel", "style"),
    [Input("editing-task-id", "data")]
)
def toggle_edit_panel(editing_id):
    return HIDDEN if editing_id is None else VISIBLE


@app.callback(
    [Output("confirm-delete", "displayed"),
     Output("confirm-delete", "message"),
     Output("pending-delete-id", "data")],
    [Input({"type": "delete-task", "index": ALL}, "n_clicks")],
    [State("tasks-store", "data")],
    prevent_initial_call=True
)
def ask_delete_confirmation(delete_clicks, tasks):
    if not ctx.triggered or not ctx.triggered[0]["value"]:
        return False, no_update, no_update

    task_id = ctx.triggered_id["index"]
    task = next((t for t in tasks or [] if t["id"] == task_id), None)
    if task is None:
        return False, no_update, no_update
    message = f'Are you sure you want to delete "{task["title"]}"? This action cannot be undone.'
    return True, message, task_id


@app.callback(
    [Output("task-list", "children"),
     Output("task-count", "children")],
    [Input("tasks-store", "data")]
)
def update_task_list(tasks):
    tasks = tasks or []
    return render_task_list(tasks), f"Your Tasks ({len(tasks)})"


@app.callback(
    Output("create-task-button", "disabled"),
    [Input("task-title", "value")]
)
def toggle_create_button(title):
    return not (title or "").strip()


@app.callback(
    Output("save-edit-button", "disabled"),
    [Input("edit-title", "value")]
)
def toggle_save_button(title):
    return not (title or "").strip()


@app.callback(
    Output("report-district", "options"),
    [Input("main-tabs", "value")]
)
def load_district_options(active_tab):
    return [
        {"label": f"{d['name']} ({d['province']})", "value": d["id"]}
        for d in client.get_districts()
    ]


@app.callback(
    [Output("report-markdown", "children"),
     Output("report-summary", "children"),
     Output("predictions-table", "children")],
    [Input("report-district", "value"),
     Input("report-disaster-type", "value"),
     Input("report-risk-level", "value")]
)
def update_risk_report(district_id, disaster_type, risk_level):
    """Refresh the markdown report and predictions table."""
    filters = {
        "district_id": district_id,
        "disaster_type": _filter_value(disaster_type),
        "risk_level": _filter_value(risk_level),
    }
    report = client.get_risk_report(**filters)
    if report is None:
        return "Error loading report", [], html.P("Error loading predictions data")

    summary = report["summary"]
    cards = [
        html.Div([html.H3(str(summary["total_districts"])), html.P("Districts")], className="summary-card"),
        html.Div([html.H3(str(summary["high_risk_count"])), html.P("High Risk")], className="summary-card"),
        html.Div([html.H3(str(summary["medium_risk_count"])), html.P("Medium Risk")], className="summary-card"),
        html.Div([html.H3(str(summary["low_risk_count"])), html.P("Low Risk")], className="summary-card"),
        html.Div([html.H3(f"{summary['average_data_completeness']:.1f}%"), html.P("Data Completeness")],
                 className="summary-card"),
    ]

    predictions = client.get_risk_predictions(**filters)
    if not predictions:
        return report["markdown_report"], cards, html.P("No predictions available")

    table_data = pd.DataFrame(predictions)[[
        'district_id', 'disaster_type', 'target_date', 'risk_level', 'hazard_score', 'data_completeness'
    ]].to_dict('records')

    table = dash_table.DataTable(
        data=table_data,
        columns=[
            {"name": "District", "id": "district_id"},
            {"name": "Type", "id": "disaster_type"},
            {"name": "Target Date", "id": "target_date", "type": "datetime"},
            {"name": "Risk Level", "id": "risk_level"},
            {"name": "Hazard Score", "id": "hazard_score", "type": "numeric", "format": {"specifier": ".1f"}},
            {"name": "Data Completeness", "id": "data_completeness", "type": "numeric",
             "format": {"specifier": ".0f"}}
        ],
        style_cell={'textAlign': 'left', 'fontSize': '12px'},
        style_header={'backgroundColor': 'rgb(230, 230, 230)', 'fontWeight': 'bold'},
        style_data_conditional=[
            {'if': {'filter_query': '{risk_level} = "high"'}, 'backgroundColor': '#ffebee', 'color': 'black'},
            {'if': {'filter_query': '{risk_level} = "medium"'}, 'backgroundColor': '#fff3e0', 'color': 'black'},
            {'if': {'filter_query': '{risk_level} = "low"'}, 'backgroundColor': '#e8f5e8', 'color': 'black'},
        ]
    )
    return report["markdown_report"], cards, table


def _annotated_figure(text: str) -> go.Figure:
    return go.Figure().add_annotation(
        text=text,
        xref="paper", yref="paper",
        x=0.5, y=0.5, showarrow=False
    )


@app.callback(
    Output("rainfall-chart", "figure"),
    [Input("report-district", "value")]
)
def update_rainfall_chart(district_id):
    """Daily rainfall per district from stored weather observations."""
    weather = client.get_weather_data(district_id)
    if not weather:
        return _annotated_figure("No weather data available")

    df = pd.DataFrame(weather)
    df['date'] = pd.to_datetime(df['date'])
    fig = px.bar(
        df,
        x='date',
        y='rainfall',
        color=df['district_id'].astype(str),
        labels={'rainfall': 'Rainfall (mm)', 'date': 'Date', 'color': 'District'},
        title="Daily Rainfall"
    )
    fig.update_layout(height=400)
    return fig


if __name__ == "__main__":
    setup_logging(level=os.getenv("LOG_LEVEL", "INFO"))
    app.run(debug=True, host="0.0.0.0", port=8050)
