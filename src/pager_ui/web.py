from __future__ import annotations
import argparse
import os
from dataclasses import asdict
from flask import Flask, request, jsonify, Response
from pager.config import load_settings
from pager.session import ReaderSession

app = Flask(__name__)
_session: ReaderSession | None = None


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _state():
    st = _session.status()  # type: ignore
    return jsonify({**asdict(st), "file": _session.current_file})  # type: ignore


@app.before_request
def _require_session():
    if request.endpoint not in ("health", "home") and _session is None:
        return _error("pager not initialized", 409)
    return None

# ---------- API ----------
@app.get("/api/health")
def health():
    return jsonify({"ok": True, "loaded": bool(_session and _session.loaded)})


@app.get("/api/status")
def api_status():
    return _state()


@app.get("/api/page/<int:n>")
def api_page(n: int):
    try:
        content = _session.page_content(n)  # type: ignore
    except IndexError as e:
        return _error(str(e), 404)
    b = _session.boundaries[n]  # type: ignore
    return jsonify({"page": n, "content": content, "start": b.start, "end": b.end,
                    "total": len(_session.pages)})  # type: ignore


@app.post("/api/next")
def api_next():
    if not _session.next_page():  # type: ignore
        return _error("real content is hidden", 409)
    return _state()


@app.post("/api/prev")
def api_prev():
    if not _session.previous_page():  # type: ignore
        return _error("real content is hidden", 409)
    return _state()


@app.post("/api/jump/<int:n>")
def api_jump(n: int):
    _session.jump(n)  # type: ignore
    return _state()


@app.post("/api/real/<flag>")
def api_real(flag: str):
    if flag not in ("on", "off"):
        return _error("flag must be 'on' or 'off'", 400)
    _session.show_real(flag == "on")  # type: ignore
    return _state()


@app.get("/api/search")
def api_search():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", None, type=int)
    if k is not None and k < 1:
        return _error("k must be >= 1", 400)
    rows = _session.search(q, limit=k)  # type: ignore
    return jsonify([asdict(m) for m in rows])

# ---------- UI ----------
@app.get("/")
def home():
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>Pager</title>
<style>
body{margin:0;background:#0b0f14;color:#cfd8e3;font:15px/1.45 system-ui,Arial}
.bar{position:fixed;bottom:0;left:0;right:0;padding:4px 12px;background:#0f141b;
  border-top:1px solid #1c2530;font-family:ui-monospace,Menlo,Consolas,monospace}
.container{max-width:860px;margin:24px auto;padding:0 16px}
input{padding:8px 10px;border-radius:8px;border:1px solid #1c2530;background:#0b1117;color:#cfd8e3}
button{padding:8px 12px;border-radius:8px;border:1px solid #1c2530;background:#0b1117;color:#cfd8e3;cursor:pointer}
.row{padding:6px 0;border-top:1px solid #1c2530;cursor:pointer}
.small{color:#8a94a6}
</style>
</head>
<body>
<div class="container">
  <h1>Pager</h1>
  <button id="prev">Prev</button> <button id="next">Next</button>
  <button id="reveal">Reveal</button>
  <input id="q" placeholder="Search..." autocomplete="off" />
  <div id="out"></div>
</div>
<div class="bar" id="bar">Loading...</div>
<script>
const $ = (s) => document.querySelector(s);
let real = false;
function show(st){
  $("#bar").textContent = st.real ? st.text : `[${st.page+1}/${st.total}]`;
  real = st.real;
}
async function call(method, url){
  const r = await fetch(url, {method});
  const data = await r.json();
  if(!r.ok){ $("#bar").textContent = data.error; return null; }
  return data;
}
async function refresh(){ const st = await call("GET", "/api/status"); if(st) show(st); }
$("#prev").onclick = async () => { const st = await call("POST", "/api/prev"); if(st) show(st); };
$("#next").onclick = async () => { const st = await call("POST", "/api/next"); if(st) show(st); };
$("#reveal").onclick = async () => { const st = await call("POST", `/api/real/${real ? "off" : "on"}`); if(st) show(st); };
$("#q").addEventListener("keydown", async (ev) => {
  if(ev.key !== "Enter") return;
  const rows = await call("GET", `/api/search?q=${encodeURIComponent($("#q").value)}`);
  if(!rows) return;
  $("#out").innerHTML = "";
  for(const m of rows){
    const div = document.createElement("div");
    div.className = "row";
    div.innerHTML = `<span class="small">p.${m.page+1}</span> `;
    div.appendChild(document.createTextNode(m.context));
    div.onclick = async () => { const st = await call("POST", `/api/jump/${m.page}`); if(st) show(st); };
    $("#out").appendChild(div);
  }
  if(rows.length === 0) $("#out").textContent = "No matches.";
});
refresh();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of ReaderSession")
    ap.add_argument("--file", default=None)
    ap.add_argument("--config", default=None)
    ap.add_argument("--workspace", default=os.getcwd())
    ap.add_argument("--page-size", type=int, default=None)
    ap.add_argument("--db", dest="db", default=None)  # DSN: "sqlite:///path" or "memory://"
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _session
    sess = None
    try:
        settings = load_settings(args.config, workspace=args.workspace)
        settings = settings.replace(file_path=args.file, page_size=args.page_size,
                                    store_dsn=args.db).validate()
        sess = ReaderSession(settings, workspace=args.workspace, verbose=args.verbose)
        sess.load()
    except (FileNotFoundError, RuntimeError, ValueError) as e:
        if sess is not None:
            sess.close()
        ap.error(str(e))
    _session = sess

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _session.close()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
