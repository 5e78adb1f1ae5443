"""Browser pages that consume the feed API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def entry_page() -> HTMLResponse:
    """Quick-entry screen."""
    return HTMLResponse(_ENTRY_HTML)


@router.get("/history", response_class=HTMLResponse)
async def history_page() -> HTMLResponse:
    """Calendar history screen."""
    return HTMLResponse(_HISTORY_HTML)


_STYLE = """
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 0;
             background: #f4f7f5; color: #1d2b24; }
      main { max-width: 520px; margin: 0 auto; padding: 1.5rem 1rem 3rem; }
      h1 { margin: 0 0 0.25rem; font-size: 1.5rem; }
      h2 { margin: 0 0 0.75rem; font-size: 1.1rem; }
      .muted { color: #66756d; margin: 0.25rem 0; }
      .card { background: #fff; border-radius: 12px; padding: 1rem;
              margin-bottom: 1rem; box-shadow: 0 1px 3px rgba(0,0,0,0.08); }
      .row { display: flex; gap: 0.5rem; align-items: center; }
      .spread { justify-content: space-between; }
      .stepper { display: flex; align-items: center; gap: 0.75rem; margin: 0.5rem 0; }
      .stepper button { width: 2.5rem; height: 2.5rem; font-size: 1.25rem; }
      .stepper .value { min-width: 5rem; text-align: center; font-weight: 600; }
      .tab.active { background: #1f9d65; color: #fff; }
      .save { width: 100%; padding: 0.75rem; font-size: 1rem; background: #1f9d65;
              color: #fff; border: 0; border-radius: 8px; }
      .error { color: #c0392b; }
      .totals { display: grid; grid-template-columns: repeat(2, 1fr); gap: 0.5rem; }
      .total { background: #f4f7f5; border-radius: 8px; padding: 0.5rem; }
      .chart { display: flex; gap: 0.4rem; height: 160px; align-items: flex-end; }
      .bar-wrap { flex: 1; display: flex; flex-direction: column; align-items: center;
                  height: 100%; font-size: 0.7rem; }
      .bar-track { flex: 1; width: 100%; display: flex; align-items: flex-end; }
      .bar { width: 100%; background: #1f9d65; border-radius: 4px 4px 0 0; }
      .log { display: flex; justify-content: space-between; align-items: center;
             border-top: 1px solid #e4ebe7; padding: 0.5rem 0; gap: 0.5rem; }
      .log .right { text-align: right; }
      .calendar { display: grid; grid-template-columns: repeat(7, 1fr); gap: 4px; }
      .weekday { text-align: center; font-size: 0.75rem; color: #66756d; }
      .day { border: 0; border-radius: 6px; padding: 0.35rem 0; display: flex;
             flex-direction: column; align-items: center; font-size: 0.7rem; }
      .day.outside { color: #9aa7a0; }
      .day.selected { outline: 2px solid #1d2b24; }
      .day.strong { color: #fff; }
      .day .today { text-decoration: underline; font-weight: 700; }
"""

_ENTRY_HTML = (
    """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Baby Feeding Tracker</title>
    <style>"""
    + _STYLE
    + """    </style>
  </head>
  <body>
    <main>
      <div class="row spread">
        <h1>Baby Feeding Tracker</h1>
        <a href="/history">History</a>
      </div>
      <p class="muted">Shared log, no sign-in. Everyone sees the same data.</p>

      <section class="card">
        <h2>Quick entry</h2>
        <div class="row">
          <button class="tab" id="tab-breast" onclick="selectType('breast')">
            Breastfeeding
          </button>
          <button class="tab" id="tab-formula" onclick="selectType('formula')">
            Formula
          </button>
        </div>
        <div id="breast-form">
          <p class="muted">5 minute steps</p>
          <label>Left</label>
          <div class="stepper">
            <button onclick="step('left', -1)">-</button>
            <div class="value" id="left"></div>
            <button onclick="step('left', 1)">+</button>
          </div>
          <label>Right</label>
          <div class="stepper">
            <button onclick="step('right', -1)">-</button>
            <div class="value" id="right"></div>
            <button onclick="step('right', 1)">+</button>
          </div>
          <p class="muted">Estimated: <strong id="estimate"></strong></p>
        </div>
        <div id="formula-form">
          <p class="muted">10 ml steps</p>
          <div class="stepper">
            <button onclick="step('formula', -1)">-</button>
            <div class="value" id="formula"></div>
            <button onclick="step('formula', 1)">+</button>
          </div>
        </div>
        <button class="save" id="save" onclick="submitFeed()">Save feeding</button>
        <p class="error" id="error"></p>
      </section>

      <section class="card">
        <h2>Breast milk ml per minute</h2>
        <p class="muted">Used for every estimate. Anyone can change it.</p>
        <div class="stepper">
          <button onclick="stepRate('down')">-</button>
          <div class="value" id="rate"></div>
          <button onclick="stepRate('up')">+</button>
        </div>
      </section>

      <section class="card">
        <h2>Today</h2>
        <div class="totals">
          <div class="total">
            <p class="muted">Total intake</p><strong id="today-total"></strong>
          </div>
          <div class="total">
            <p class="muted">Feedings</p><strong id="today-count"></strong>
          </div>
        </div>
      </section>

      <section class="card">
        <h2>Last 7 days</h2>
        <div class="chart" id="chart"></div>
      </section>

      <section class="card">
        <h2>Recent feedings</h2>
        <div id="logs"></div>
      </section>
    </main>
    <script>
      const STEPS = { left: 5, right: 5, formula: 10 };
      const form = { type: 'breast', left: 10, right: 10, formula: 120 };
      let rate = 8;

      function ml(value) {
        return (Number.isInteger(value) ? value : value.toFixed(1)) + 'ml';
      }

      function renderForm() {
        document.getElementById('tab-breast').classList.toggle(
          'active', form.type === 'breast');
        document.getElementById('tab-formula').classList.toggle(
          'active', form.type === 'formula');
        document.getElementById('breast-form').hidden = form.type !== 'breast';
        document.getElementById('formula-form').hidden = form.type !== 'formula';
        document.getElementById('left').textContent = form.left + ' min';
        document.getElementById('right').textContent = form.right + ' min';
        document.getElementById('formula').textContent = form.formula + 'ml';
        document.getElementById('estimate').textContent =
          ml((form.left + form.right) * rate);
        document.getElementById('rate').textContent = ml(rate);
      }

      function selectType(type) {
        form.type = type;
        renderForm();
      }

      function step(field, direction) {
        form[field] = Math.max(0, form[field] + STEPS[field] * direction);
        renderForm();
      }

      function render(state) {
        rate = state.breast_ml_per_minute;
        document.getElementById('error').textContent =
          state.error ? 'Error: ' + state.error : '';
        document.getElementById('today-total').textContent = ml(state.today.total_ml);
        document.getElementById('today-count').textContent = state.today.count;
        const chart = document.getElementById('chart');
        chart.innerHTML = '';
        for (const day of state.recent_daily) {
          const wrap = document.createElement('div');
          wrap.className = 'bar-wrap';
          wrap.innerHTML =
            '<span>' + ml(day.total_ml) + '</span>' +
            '<div class="bar-track"><div class="bar" style="height:' +
            day.height_percent + '%"></div></div>' +
            '<span>' + day.label + '</span>';
          chart.appendChild(wrap);
        }
        const logs = document.getElementById('logs');
        logs.innerHTML = '';
        if (state.records.length === 0) {
          logs.innerHTML = '<p class="muted">No feedings yet.</p>';
        }
        for (const record of state.records) {
          const row = document.createElement('div');
          row.className = 'log';
          const detail = record.feed_type === 'breast'
            ? '<p class="muted">L ' + record.left_minutes + ' min / R ' +
              record.right_minutes + ' min</p>'
            : '';
          row.innerHTML =
            '<button aria-label="Delete feeding">&times;</button>' +
            '<div><div>' + (record.feed_type === 'breast' ? 'Breast' : 'Formula') +
            '</div><p class="muted">' + record.time_label + '</p></div>' +
            '<div class="right">' + detail + '<strong>' + ml(record.volume_ml) +
            '</strong></div>';
          row.querySelector('button').onclick = () => deleteFeed(record.id);
          logs.appendChild(row);
        }
        renderForm();
      }

      async function call(path, options) {
        const res = await fetch(path, options);
        const state = await res.json();
        if (res.ok) {
          render(state);
        } else {
          document.getElementById('error').textContent = 'Error: ' + state.error;
        }
      }

      async function submitFeed() {
        const save = document.getElementById('save');
        save.disabled = true;
        save.textContent = 'Saving...';
        await call('/api/feeds', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({
            feed_type: form.type,
            left_minutes: form.left,
            right_minutes: form.right,
            formula_ml: form.formula
          })
        });
        save.disabled = false;
        save.textContent = 'Save feeding';
      }

      async function deleteFeed(id) {
        if (!window.confirm('Delete this feeding?')) {
          return;
        }
        await call('/api/feeds/' + encodeURIComponent(id) + '?confirmed=true', {
          method: 'DELETE'
        });
      }

      async function stepRate(direction) {
        rate = Math.max(0, rate + (direction === 'up' ? 1 : -1));
        renderForm();
        await call('/api/settings/breast-ml-per-minute/' + direction, {
          method: 'POST'
        });
      }

      renderForm();
      call('/api/entry');
    </script>
  </body>
</html>
"""
)

_HISTORY_HTML = (
    """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Feeding History</title>
    <style>"""
    + _STYLE
    + """    </style>
  </head>
  <body>
    <main>
      <div class="row spread">
        <h1>History</h1>
        <a href="/">Quick entry</a>
      </div>
      <p class="muted">Pick a day on the calendar to see its feedings.</p>

      <section class="card">
        <div class="row spread">
          <button onclick="load({ nav: 'prev' })">Previous</button>
          <strong id="month-label"></strong>
          <button onclick="load({ nav: 'next' })">Next</button>
        </div>
        <div class="calendar" id="weekdays"></div>
        <div class="calendar" id="calendar"></div>
        <p class="error" id="error"></p>
      </section>

      <section class="card">
        <div class="row spread">
          <h2 id="selected-label"></h2>
          <button onclick="load({})">Refresh</button>
        </div>
        <p class="muted" id="loading">Loading...</p>
        <div class="totals">
          <div class="total">
            <p class="muted">Total intake</p><strong id="total"></strong>
          </div>
          <div class="total">
            <p class="muted">Feedings</p><strong id="sessions"></strong>
          </div>
          <div class="total">
            <p class="muted">Breast milk (est.)</p><strong id="breast"></strong>
          </div>
          <div class="total">
            <p class="muted">Formula</p><strong id="formula"></strong>
          </div>
        </div>
        <div id="logs"></div>
      </section>
    </main>
    <script>
      let state = null;

      function ml(value) {
        return (Number.isInteger(value) ? value : value.toFixed(1)) + 'ml';
      }

      function render() {
        document.getElementById('month-label').textContent = state.month_label;
        document.getElementById('selected-label').textContent = state.selected_label;
        document.getElementById('error').textContent =
          state.error ? 'Error: ' + state.error : '';
        document.getElementById('loading').hidden = true;
        document.getElementById('weekdays').innerHTML = state.weekdays
          .map((label) => '<div class="weekday">' + label + '</div>').join('');
        const calendar = document.getElementById('calendar');
        calendar.innerHTML = '';
        for (const cell of state.cells) {
          const button = document.createElement('button');
          button.className = 'day' + (cell.in_month ? '' : ' outside') +
            (cell.selected ? ' selected' : '') + (cell.high_volume ? ' strong' : '');
          button.style.backgroundColor = 'rgba(31, 157, 101, ' + cell.fill_alpha + ')';
          button.innerHTML =
            '<span class="' + (cell.today ? 'today' : '') + '">' +
            cell.day_number + '</span><span>' + ml(cell.total_ml) + '</span>';
          button.onclick = () => load({ day: cell.key });
          calendar.appendChild(button);
        }
        const selected = state.selected;
        document.getElementById('total').textContent = ml(selected.total_ml);
        document.getElementById('sessions').textContent = selected.sessions;
        document.getElementById('breast').textContent = ml(selected.breast_ml);
        document.getElementById('formula').textContent = ml(selected.formula_ml);
        const logs = document.getElementById('logs');
        logs.innerHTML = selected.records.length === 0
          ? '<p class="muted">No feedings on this day.</p>'
          : '';
        for (const record of selected.records) {
          const detail = record.feed_type === 'breast'
            ? '<p class="muted">L ' + record.left_minutes + ' min / R ' +
              record.right_minutes + ' min</p>'
            : '';
          const row = document.createElement('div');
          row.className = 'log';
          row.innerHTML =
            '<div><div>' + (record.feed_type === 'breast' ? 'Breast' : 'Formula') +
            '</div><p class="muted">' + record.time_label + '</p></div>' +
            '<div class="right">' + detail + '<strong>' + ml(record.volume_ml) +
            '</strong></div>';
          logs.appendChild(row);
        }
      }

      async function load(options) {
        const params = new URLSearchParams();
        if (options.day) {
          params.set('day', options.day);
        } else if (state) {
          params.set('day', state.selected_day);
          params.set('month', state.month);
        }
        if (options.nav) {
          params.set('nav', options.nav);
        }
        document.getElementById('loading').hidden = false;
        const res = await fetch('/api/history?' + params.toString());
        const next = await res.json();
        document.getElementById('loading').hidden = true;
        if (res.ok) {
          state = next;
          render();
        } else {
          document.getElementById('error').textContent =
            'Error: ' + (next.error || JSON.stringify(next.detail));
        }
      }

      load({});
    </script>
  </body>
</html>
"""
)
