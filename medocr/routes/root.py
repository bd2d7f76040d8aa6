from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
    html = """<!doctype html>
<html><head><meta charset="utf-8"/><title>Medical OCR + Medication Explainer</title>
<script src="https://cdn.jsdelivr.net/npm/tesseract.js@5/dist/tesseract.min.js"></script>
<style>
body{font-family:ui-sans-serif,system-ui,-apple-system,Segoe UI,Roboto,Arial;margin:0;color:#0f172a;
  background:linear-gradient(180deg,#fafafa,#f5f7fb);min-height:100vh}
.wrap{padding:20px}
.card{border:1px solid rgba(15,23,42,.08);background:rgba(255,255,255,.9);border-radius:16px;padding:14px;
  box-shadow:0 10px 30px rgba(15,23,42,.06);display:flex;flex-direction:column;min-width:0;overflow:hidden}
.head{margin-bottom:16px;padding:18px}
.title{display:flex;justify-content:space-between;align-items:baseline;flex-wrap:wrap;gap:12px}
h1{margin:0;font-size:26px}
.sub{margin-top:6px;color:rgba(15,23,42,.7)}
.bar{display:flex;gap:10px;align-items:center;flex-wrap:wrap;margin-top:14px}
.btn{padding:10px 14px;border-radius:12px;border:1px solid rgba(15,23,42,.12);background:#fff;cursor:pointer;font-weight:600}
.primary{background:linear-gradient(135deg,#6366f1,#4f46e5);color:#fff}
.success{background:linear-gradient(135deg,#10b981,#059669);color:#fff}
.btn:disabled{opacity:.45;cursor:not-allowed}
.err{margin-top:12px;padding:12px;border-radius:12px;background:rgba(254,242,242,.9);
  border:1px solid rgba(239,68,68,.25);color:#991b1b}
.grid{display:grid;grid-template-columns:1fr 1fr 1.2fr;gap:16px}
.ct{font-size:13px;text-transform:uppercase;letter-spacing:.08em;color:rgba(15,23,42,.6);margin-bottom:10px}
.preview{flex:1;border:1px dashed rgba(15,23,42,.2);border-radius:12px;display:flex;align-items:flex-start;
  justify-content:center;padding:10px;overflow:auto;min-height:320px}
.preview img{max-width:100%;max-height:100%;object-fit:contain}
textarea{flex:1;width:100%;resize:none;border-radius:12px;border:1px solid rgba(15,23,42,.12);padding:12px;
  font-family:ui-monospace,SFMono-Regular,Menlo,Monaco,Consolas;font-size:12.5px;line-height:1.5;box-sizing:border-box;min-height:320px}
.out{flex:1;border-radius:12px;border:1px solid rgba(15,23,42,.12);padding:12px;white-space:pre-wrap;line-height:1.55}
</style></head>
<body>
<div class="wrap">
  <div class="card head">
    <div class="title"><h1>Medical OCR + Medication Explainer</h1><span id="status">Ready</span></div>
    <p class="sub">Upload a prescription image, extract text with OCR, then generate a patient-friendly explanation.</p>
    <div class="bar">
      <input type="file" id="file" accept="image/*"/>
      <button class="btn primary" id="runOcr" disabled>Run OCR</button>
      <button class="btn success" id="summarize" disabled>Summarize</button>
      <button class="btn" id="clear">Clear</button>
      <span id="progress"></span>
    </div>
    <div class="err" id="error" hidden></div>
  </div>
  <div class="grid">
    <div class="card"><div class="ct">Image</div><div class="preview" id="preview"><span>No image selected</span></div></div>
    <div class="card"><div class="ct">OCR Text</div><textarea id="ocrText" readonly placeholder="OCR text will appear here…"></textarea></div>
    <div class="card"><div class="ct">Patient-friendly explanation</div><div class="out" id="aiText">Run OCR, then click Summarize.</div></div>
  </div>
</div>
<script>
  const S = { file:null, url:"", ocrRunning:false, summarizing:false, progress:0, ocrText:"", aiText:"", error:"" };
  const $ = id => document.getElementById(id);

  function cleanOcrText(raw){
    return (raw || "").split("\\n")
      .map(l => l.replace(/\\s+/g, " ").trim())
      .filter((l, i, arr) => !(l === "" && arr[i - 1] === ""))
      .join("\\n").trim();
  }

  function render(){
    const busy = S.ocrRunning || S.summarizing;
    $("status").textContent = busy ? "Working…" : "Ready";
    $("runOcr").disabled = !(S.file && !S.ocrRunning && !S.summarizing);
    $("summarize").disabled = !(S.ocrText.trim() && !S.summarizing && !S.ocrRunning);
    $("progress").textContent = busy ? S.progress + "%" : "";
    $("error").hidden = !S.error;
    $("error").textContent = S.error;
    $("preview").innerHTML = S.url ? '<img alt="Prescription" src="' + S.url + '"/>' : "<span>No image selected</span>";
    $("ocrText").value = S.ocrText;
    $("aiText").textContent = S.summarizing ? "Summarizing…" : (S.aiText || "Run OCR, then click Summarize.");
  }

  function resetOutputs(){ S.error = ""; S.progress = 0; S.ocrText = ""; S.aiText = ""; }

  $("file").onchange = e => {
    const f = e.target.files && e.target.files[0];
    resetOutputs();
    if (S.url) URL.revokeObjectURL(S.url);
    S.file = f || null;
    S.url = f ? URL.createObjectURL(f) : "";
    render();
  };

  $("clear").onclick = () => {
    resetOutputs();
    if (S.url) URL.revokeObjectURL(S.url);
    S.file = null; S.url = "";
    $("file").value = "";
    render();
  };

  $("runOcr").onclick = async () => {
    if (!S.file || S.ocrRunning) return;
    S.ocrRunning = true; resetOutputs(); render();
    try {
      const result = await Tesseract.recognize(S.file, "eng", {
        logger: m => { if (typeof m.progress === "number") { S.progress = Math.round(m.progress * 100); render(); } }
      });
      const raw = (result && result.data && result.data.text) || "";
      S.ocrText = cleanOcrText(raw) || "(No text detected)";
    } catch (e) {
      S.error = String(e);
    } finally {
      S.ocrRunning = false; render();
    }
  };

  $("summarize").onclick = async () => {
    if (!S.ocrText.trim() || S.summarizing) return;
    S.summarizing = true; S.error = ""; S.aiText = ""; render();
    try {
      const resp = await fetch("/api/summarize-med", {
        method: "POST",
        headers: { "Content-Type": "application/json" },
        body: JSON.stringify({ ocrText: S.ocrText }),
      });
      const data = await resp.json().catch(() => ({}));
      if (!resp.ok) throw new Error(data.error || data.details || "Summarize failed");
      S.aiText = data.text || "(No response)";
    } catch (e) {
      S.error = String(e);
    } finally {
      S.summarizing = false; render();
    }
  };

  render();
</script>
</body></html>"""
    return HTMLResponse(html)
