MINDMAP_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Learnmap</title>
    <link rel="icon" href="/favicon.ico">
    <script src="https://cdn.jsdelivr.net/npm/d3@7"></script>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body { background: #fafafa; font-family: Arial, Helvetica, sans-serif; color: #333; }
        #toolbar { position: absolute; top: 16px; left: 16px; display: flex; gap: 8px; z-index: 10; }
        #toolbar .brand { font-size: 22px; font-weight: bold; color: #8B5CC0; margin-right: 16px; }
        button {
            padding: 6px 12px; border: 1px solid #ccc; border-radius: 4px;
            background: white; cursor: pointer; font-size: 13px;
        }
        button:hover { border-color: #8B5CC0; color: #8B5CC0; }
        button:disabled { opacity: 0.5; cursor: default; }
        button.danger:hover { border-color: #BA496E; color: #BA496E; }
        #graph-container { display: flex; justify-content: center; padding-top: 56px; }
        .node { cursor: pointer; }
        .node rect { fill: white; fill-opacity: 0.8; }
        .backdrop {
            position: fixed; inset: 0; background: rgba(0,0,0,0.35);
            display: none; align-items: center; justify-content: center; z-index: 100;
        }
        .backdrop.visible { display: flex; }
        .dialog {
            background: white; border-radius: 8px; padding: 20px; width: 640px;
            max-height: 90vh; overflow-y: auto; display: flex; flex-direction: column; gap: 10px;
        }
        .dialog h2 { font-size: 18px; color: #8B5CC0; }
        .dialog label { font-size: 12px; color: #666; }
        .dialog input, .dialog textarea {
            width: 100%; padding: 8px; border: 1px solid #ddd; border-radius: 4px; font-size: 13px;
        }
        .dialog textarea { min-height: 160px; font-family: inherit; }
        .dialog .meta { font-size: 11px; color: #999; }
        .dialog .row { display: flex; gap: 8px; justify-content: flex-end; }
        .dialog .error { color: #BA496E; font-size: 12px; }
    </style>
</head>
<body>
    <div id="toolbar">
        <span class="brand">Learnmap</span>
        <button id="add-btn">+ New entry</button>
        <button id="reset-btn">Close all</button>
    </div>
    <div id="graph-container"></div>

    <div class="backdrop" id="detail-dialog">
        <div class="dialog">
            <h2 id="detail-heading"></h2>
            <div class="meta" id="detail-meta"></div>
            <label>Title</label>
            <input id="detail-title">
            <label>Description (Markdown)</label>
            <textarea id="detail-description"></textarea>
            <label>Rewrite with AI</label>
            <div class="row">
                <input id="detail-prompt" placeholder="Prompt">
                <button class="dictate" data-target="detail-prompt">Dictate</button>
                <button id="detail-ai-btn">Ask AI</button>
            </div>
            <div class="error" id="detail-error"></div>
            <div class="row">
                <button class="danger" id="detail-delete-btn">Delete</button>
                <button id="detail-close-btn">Close</button>
                <button id="detail-save-btn">Save</button>
            </div>
        </div>
    </div>

    <div class="backdrop" id="add-dialog">
        <div class="dialog">
            <h2>New entry</h2>
            <label>Main topic</label>
            <input id="add-main">
            <label>Sub topic</label>
            <input id="add-sub">
            <label>Title</label>
            <input id="add-title">
            <label>AI prompt (needs a title)</label>
            <div class="row">
                <input id="add-prompt" placeholder="Prompt" disabled>
                <button class="dictate" data-target="add-prompt">Dictate</button>
                <button id="add-ai-btn" disabled>Ask AI</button>
            </div>
            <label>Description (Markdown)</label>
            <textarea id="add-description"></textarea>
            <div class="error" id="add-error"></div>
            <div class="row">
                <button id="add-close-btn">Cancel</button>
                <button id="add-save-btn">Create</button>
            </div>
        </div>
    </div>

    <script>
        const svg = d3.select('#graph-container').append('svg');
        const linkLayer = svg.append('g');
        const nodeLayer = svg.append('g');
        let currentDetail = null;

        async function api(method, url, body) {
            const options = { method, headers: {} };
            if (body instanceof FormData) {
                options.body = body;
            } else if (body !== undefined) {
                options.headers['Content-Type'] = 'application/json';
                options.body = JSON.stringify(body);
            }
            const response = await fetch(url, options);
            const data = await response.json().catch(() => ({}));
            if (!response.ok) throw new Error(data.detail || response.statusText);
            return data;
        }

        function render(graph) {
            svg.attr('width', graph.width).attr('height', graph.height);
            const shownLinks = graph.links.filter(l => l.display);
            linkLayer.selectAll('line')
                .data(shownLinks, d => d.source + '->' + d.target)
                .join('line')
                .attr('stroke', '#e6e6e6').attr('stroke-width', 2).attr('stroke-opacity', 0.6)
                .transition().duration(500)
                .attr('x1', d => d.x1).attr('y1', d => d.y1)
                .attr('x2', d => d.x2).attr('y2', d => d.y2);

            const shownNodes = graph.nodes.filter(n => n.display);
            const groups = nodeLayer.selectAll('g.node')
                .data(shownNodes, d => d.id)
                .join(enter => {
                    const g = enter.append('g').attr('class', 'node')
                        .attr('transform', d => `translate(${d.x},${d.y})`);
                    g.append('circle').attr('r', 0);
                    g.append('text');
                    return g;
                });
            groups.on('click', (event, d) => onNodeClick(event, d));
            groups.transition().duration(500)
                .attr('transform', d => `translate(${d.x},${d.y})`);
            groups.select('circle')
                .attr('fill', d => d.color)
                .transition().duration(750).attr('r', d => d.size);
            groups.select('text')
                .attr('text-anchor', d => d.group === 1 ? 'middle' : 'start')
                .attr('dx', d => d.group === 1 ? 0 : 30)
                .attr('dy', '.35em')
                .attr('font-size', d => d.group === 1 ? '16px' : d.group === 2 ? '14px' : '12px')
                .attr('font-weight', d => d.group === 1 ? 'bold' : 'normal')
                .attr('fill', '#333')
                .text(d => d.name || d.id);
            groups.selectAll('rect').remove();
            groups.each(function () {
                const text = this.querySelector('text');
                const box = text.getBBox();
                d3.select(this).insert('rect', 'text')
                    .attr('x', box.x - 4).attr('y', box.y - 4)
                    .attr('width', box.width + 8).attr('height', box.height + 8)
                    .attr('rx', 4).attr('ry', 4);
            });
        }

        async function onNodeClick(event, node) {
            event.stopPropagation();
            if (node.group === 3) {
                openDetail(node.id);
                return;
            }
            render(await api('POST', '/mindmap/click', { node_id: node.id }));
        }

        async function openDetail(nodeId) {
            const detail = await api('GET', '/mindmap/nodes/detail?node_id=' + encodeURIComponent(nodeId));
            currentDetail = detail;
            document.getElementById('detail-heading').textContent = detail.title;
            document.getElementById('detail-meta').textContent =
                `${detail.main_topic} / ${detail.sub_topic} - created ${detail.created_at || ''}`;
            document.getElementById('detail-title').value = detail.title;
            document.getElementById('detail-description').value = detail.description;
            document.getElementById('detail-prompt').value = '';
            document.getElementById('detail-error').textContent = '';
            document.getElementById('detail-dialog').classList.add('visible');
        }

        function closeDialog(id) {
            document.getElementById(id).classList.remove('visible');
        }

        async function askAI(promptId, targetId, button, errorId) {
            const prompt = document.getElementById(promptId).value;
            if (!prompt.trim()) return;
            button.disabled = true;
            try {
                const result = await api('POST', '/v1/ai/completions', { prompt });
                document.getElementById(targetId).value = result.content;
            } catch (err) {
                document.getElementById(errorId).textContent = err.message;
            } finally {
                button.disabled = false;
            }
        }

        async function refresh() {
            render(await api('GET', '/mindmap/data'));
        }

        document.getElementById('detail-ai-btn').onclick = (e) =>
            askAI('detail-prompt', 'detail-description', e.target, 'detail-error');
        document.getElementById('detail-close-btn').onclick = () => closeDialog('detail-dialog');
        document.getElementById('detail-save-btn').onclick = async () => {
            try {
                await api('PUT', '/v1/entries/' + currentDetail.entry_id, {
                    title: document.getElementById('detail-title').value,
                    description: document.getElementById('detail-description').value,
                });
                closeDialog('detail-dialog');
                await refresh();
            } catch (err) {
                document.getElementById('detail-error').textContent = err.message;
            }
        };
        document.getElementById('detail-delete-btn').onclick = async () => {
            try {
                await api('DELETE', '/v1/entries/' + currentDetail.entry_id);
                closeDialog('detail-dialog');
                await refresh();
            } catch (err) {
                document.getElementById('detail-error').textContent = err.message;
            }
        };

        document.getElementById('add-btn').onclick = () => {
            ['add-main', 'add-sub', 'add-title', 'add-prompt', 'add-description']
                .forEach(id => document.getElementById(id).value = '');
            document.getElementById('add-error').textContent = '';
            document.getElementById('add-dialog').classList.add('visible');
        };
        document.getElementById('add-title').oninput = (e) => {
            const hasTitle = e.target.value.trim().length > 0;
            document.getElementById('add-prompt').disabled = !hasTitle;
            document.getElementById('add-ai-btn').disabled = !hasTitle;
            if (!hasTitle) document.getElementById('add-prompt').value = '';
        };
        document.getElementById('add-ai-btn').onclick = (e) =>
            askAI('add-prompt', 'add-description', e.target, 'add-error');
        document.getElementById('add-close-btn').onclick = () => closeDialog('add-dialog');
        document.getElementById('add-save-btn').onclick = async () => {
            try {
                await api('POST', '/v1/entries', {
                    main_topic: document.getElementById('add-main').value,
                    sub_topic: document.getElementById('add-sub').value,
                    title: document.getElementById('add-title').value,
                    description: document.getElementById('add-description').value,
                });
                closeDialog('add-dialog');
                await refresh();
            } catch (err) {
                document.getElementById('add-error').textContent = err.message;
            }
        };

        document.getElementById('reset-btn').onclick = async () =>
            render(await api('POST', '/mindmap/reload'));

        // Dictation: record Opus in the browser, let the server transcribe it
        let recorder = null;
        document.querySelectorAll('.dictate').forEach(button => {
            button.onclick = async () => {
                if (recorder && recorder.state === 'recording') {
                    recorder.stop();
                    return;
                }
                const stream = await navigator.mediaDevices.getUserMedia({ audio: true });
                const chunks = [];
                recorder = new MediaRecorder(stream, { mimeType: 'audio/webm;codecs=opus' });
                recorder.ondataavailable = (e) => chunks.push(e.data);
                recorder.onstop = async () => {
                    stream.getTracks().forEach(t => t.stop());
                    button.textContent = 'Dictate';
                    const form = new FormData();
                    form.append('file', new Blob(chunks, { type: 'audio/opus' }), 'recording.opus');
                    try {
                        const result = await api('POST', '/v1/audio/transcriptions', form);
                        const target = document.getElementById(button.dataset.target);
                        if (!target.disabled) target.value = result.text;
                    } catch (err) {
                        alert(err.message);
                    }
                };
                recorder.start();
                button.textContent = 'Stop';
            };
        });

        refresh();
    </script>
</body>
</html>
"""

FAVICON_SVG = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 32 32">
<circle cx="16" cy="16" r="7" fill="#8B5CC0"/>
<circle cx="5" cy="6" r="4" fill="#B849BA"/>
<circle cx="27" cy="8" r="4" fill="#B849BA"/>
<circle cx="24" cy="27" r="3" fill="#BA496E"/>
<line x1="16" y1="16" x2="5" y2="6" stroke="#ccc" stroke-width="1.5"/>
<line x1="16" y1="16" x2="27" y2="8" stroke="#ccc" stroke-width="1.5"/>
<line x1="16" y1="16" x2="24" y2="27" stroke="#ccc" stroke-width="1.5"/>
</svg>"""
