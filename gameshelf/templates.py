INDEX_HTML = r"""<!doctype html>
<html lang="en" data-bs-theme="dark">
<head>
  <meta charset="utf-8">
  <title>{{ app_title }}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css" rel="stylesheet">
  <style>
    .card { border: 1px solid rgba(255,255,255,.08); }
    .game-cover { width: 100%; height: 180px; object-fit: cover; border-radius: .5rem .5rem 0 0; background:#222; }
    .title { white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }
    .path { color: rgba(255,255,255,.6); word-break: break-all; }
    #dropZone { border: 2px dashed rgba(255,255,255,.2); border-radius: .5rem; }
    #dropZone.over { border-color: var(--bs-success); }
    .toast-container { z-index: 1080; }
  </style>
</head>
<body>
<nav class="navbar navbar-expand-lg bg-body-tertiary px-3">
  <a class="navbar-brand" href="#">{{ app_title }}</a>
  <span class="ms-auto small text-secondary">{{ platform }}</span>
</nav>

<div class="container py-4">
  <div id="dropZone" class="p-3 mb-4">
    <form id="addForm" class="d-flex gap-2">
      <input id="addPath" class="form-control" type="text" placeholder="Drop a game file here, or paste its full path">
      <button type="button" id="browseBtn" class="btn btn-outline-light">Browse</button>
      <button type="submit" class="btn btn-success">Add</button>
    </form>
  </div>

  <div id="empty" class="text-center py-5 d-none">
    <h4>Your shelf is empty.</h4>
    <p class="text-secondary">Add an executable, script or shortcut to get started.</p>
  </div>
  <div id="games" class="row row-cols-1 row-cols-sm-2 row-cols-md-3 row-cols-xl-4 g-4"></div>
</div>

<div class="toast-container position-fixed bottom-0 end-0 p-3" id="toasts"></div>

<template id="cardTpl">
  <div class="col">
    <div class="card h-100 shadow-sm">
      <img class="game-cover" alt="cover">
      <div class="card-body d-flex flex-column">
        <div class="title fw-semibold"></div>
        <div class="small path mt-1"></div>
        <div class="small text-secondary mt-1 meta"></div>
        <div class="mt-auto pt-2 d-flex flex-wrap gap-2">
          <button class="btn btn-success btn-sm" data-act="launch">Play</button>
          <button class="btn btn-outline-info btn-sm" data-act="meta">Fetch info</button>
          <button class="btn btn-outline-light btn-sm" data-act="rename">Rename</button>
          <button class="btn btn-outline-danger btn-sm" data-act="delete">Remove</button>
        </div>
      </div>
    </div>
  </div>
</template>

<script>
async function call(op, ...args) {
  const res = await fetch(`/api/${op}`, {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify({args})
  });
  const reply = await res.json();
  if (!reply.ok) throw new Error(reply.error || `${op} failed`);
  return reply.result;
}

function toast(msg, kind) {
  const el = document.createElement("div");
  el.className = `toast show align-items-center text-bg-${kind || "danger"} border-0 mb-2`;
  const body = document.createElement("div");
  body.className = "toast-body";
  body.textContent = msg;
  el.appendChild(body);
  document.getElementById("toasts").appendChild(el);
  setTimeout(() => el.remove(), 4000);
}

async function run(fn, okMsg) {
  try {
    await fn();
    if (okMsg) toast(okMsg, "success");
  } catch (e) {
    toast(e.message);
  }
  await refresh();
}

function render(games) {
  const box = document.getElementById("games");
  const tpl = document.getElementById("cardTpl");
  box.replaceChildren();
  document.getElementById("empty").classList.toggle("d-none", games.length > 0);
  for (const g of games) {
    const card = tpl.content.cloneNode(true);
    const img = card.querySelector(".game-cover");
    if (g.metadata && g.metadata.headerImage) img.src = g.metadata.headerImage;
    card.querySelector(".title").textContent = g.name;
    card.querySelector(".title").title = g.name;
    card.querySelector(".path").textContent = g.path;
    if (g.metadata) {
      const bits = [g.metadata.releaseDate, g.metadata.genres.join(", ")];
      if (g.metadata.criticScore != null) bits.push(`Metacritic ${g.metadata.criticScore}`);
      card.querySelector(".meta").textContent = bits.filter(Boolean).join(" · ");
    }
    card.querySelector('[data-act="launch"]').onclick = () => run(() => call("launchGame", g.path), `Launching ${g.name}`);
    card.querySelector('[data-act="meta"]').onclick = () => run(() => call("fetchMetadata", g.id, g.name), "Steam info updated");
    card.querySelector('[data-act="rename"]').onclick = () => {
      const name = prompt("New name", g.name);
      if (name && name.trim() && name !== g.name) run(() => call("updateGame", g.id, {name: name.trim()}));
    };
    card.querySelector('[data-act="delete"]').onclick = () => {
      if (confirm(`Remove ${g.name} from the shelf? The file is not deleted.`)) run(() => call("deleteGame", g.id));
    };
    box.appendChild(card);
  }
}

async function refresh() {
  try {
    render(await call("listGames"));
  } catch (e) {
    toast(e.message);
  }
}

document.getElementById("addForm").onsubmit = (ev) => {
  ev.preventDefault();
  const input = document.getElementById("addPath");
  const path = input.value.trim();
  if (!path) return;
  run(async () => { await call("addGame", path); input.value = ""; }, "Added");
};

document.getElementById("browseBtn").onclick = async () => {
  try {
    const path = await call("chooseFile");
    if (path) run(() => call("addGame", path), "Added");
  } catch (e) {
    toast(e.message);
  }
};

const drop = document.getElementById("dropZone");
drop.addEventListener("dragover", (ev) => { ev.preventDefault(); drop.classList.add("over"); });
drop.addEventListener("dragleave", () => drop.classList.remove("over"));
drop.addEventListener("drop", (ev) => {
  ev.preventDefault();
  drop.classList.remove("over");
  // browsers only hand over paths as text (file:// URIs or plain paths)
  const text = ev.dataTransfer.getData("text/uri-list") || ev.dataTransfer.getData("text/plain");
  const paths = text.split(/\r?\n/).map(s => s.trim()).filter(s => s && !s.startsWith("#"))
    .map(s => s.startsWith("file://") ? decodeURIComponent(new URL(s).pathname) : s);
  if (!paths.length) { toast("Drop a file path, or use Browse"); return; }
  run(async () => { for (const p of paths) await call("addGame", p); }, "Added");
});

refresh();
</script>
</body>
</html>
"""
