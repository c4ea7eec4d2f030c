from flask import Blueprint, abort, flash, redirect, render_template, request

from .entities import catalog_summary, workflow_for
from .store import CatalogStore
from .workflow import NOT_FOUND, Failed, Redirected

bp = Blueprint('catalog', __name__)

# Each name is both the entity and its url segment
ENTITY_PATHS = ('author', 'genre', 'book', 'bookinstance')


def respond(outcome):
    """Translate a workflow outcome into a Flask response."""
    if isinstance(outcome, Redirected):
        if outcome.message:
            flash(outcome.message, "success")
        return redirect(outcome.location)
    if isinstance(outcome, Failed):
        abort(404 if outcome.kind == NOT_FOUND else 500, description=outcome.message)
    return render_template(outcome.template, **outcome.data)


def _workflow(entity):
    return workflow_for(entity, CatalogStore())


# --- Views / Forms pages (HTML) ---
@bp.route('/')
def index():
    return respond(catalog_summary(CatalogStore()))


def _register(entity):
    def list_view():
        return respond(_workflow(entity).list())

    def create_view():
        workflow = _workflow(entity)
        if request.method == 'POST':
            return respond(workflow.create(request.form))
        return respond(workflow.create_form())

    def detail_view(record_id):
        return respond(_workflow(entity).detail(record_id))

    def update_view(record_id):
        workflow = _workflow(entity)
        if request.method == 'POST':
            return respond(workflow.update(record_id, request.form))
        return respond(workflow.update_form(record_id))

    def delete_view(record_id):
        workflow = _workflow(entity)
        if request.method == 'POST':
            return respond(workflow.delete(record_id))
        return respond(workflow.delete_form(record_id))

    # create must be registered before the <record_id> routes
    bp.add_url_rule(f'/{entity}s', f'{entity}_list', list_view)
    bp.add_url_rule(f'/{entity}/create', f'{entity}_create', create_view, methods=['GET', 'POST'])
    bp.add_url_rule(f'/{entity}/<record_id>', f'{entity}_detail', detail_view)
    bp.add_url_rule(f'/{entity}/<record_id>/update', f'{entity}_update', update_view, methods=['GET', 'POST'])
    bp.add_url_rule(f'/{entity}/<record_id>/delete', f'{entity}_delete', delete_view, methods=['GET', 'POST'])


for _entity in ENTITY_PATHS:
    _register(_entity)
