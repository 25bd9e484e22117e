import os
import time
import json
import logging
import pandas as pd
import streamlit as st

from engagement import analyze, score_breakdown, BASE_SCORE
from extract import extract_text, ExtractionError
from report import build_pdf

MAX_UPLOAD_MB = float(os.environ.get("MAX_UPLOAD_MB", "10"))
UPLOAD_DIR = os.environ.get("UPLOAD_DIR", "tmp_uploads")

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("app")

st.set_page_config(page_title="Social Content Analyzer", layout="wide")

st.title("Social Content Analyzer")
st.write("Upload a PDF or an image of your post, get an engagement score, and see what to improve.")

with st.expander("How the engagement score works", expanded=False):
    st.markdown(f"""
### Engagement score (0–100)
Every post starts at **{BASE_SCORE}** and gains or loses points for:
- **Hashtags** – 2–5 is the sweet spot; none costs points
- **Call-to-action** – "share", "learn more", "sign up"… the more the stronger
- **Length** – 100–280 characters for short posts, under 500 for long ones
- **Readability** – short sentences score higher
- **Engaging language** – words like "new", "exclusive", "breakthrough"
- **Mentions** – tag 1–3 people or brands
- **Emojis** – 1–3 adds a little visual appeal

### Grades
**A+** 90+ · **A** 80+ · **B** 70+ · **C** 60+ · **D** 50+ · **F** below 50
""")

uploaded = st.file_uploader("Upload PDF, JPG or PNG", type=["pdf", "jpg", "jpeg", "png", "txt"])

if uploaded:
    if uploaded.size > MAX_UPLOAD_MB * 1024 * 1024:
        st.error(f"File size exceeds {MAX_UPLOAD_MB:g}MB limit.")
        st.stop()

    os.makedirs(UPLOAD_DIR, exist_ok=True)
    file_path = os.path.join(UPLOAD_DIR, f"{int(time.time())}_{uploaded.name}")
    with open(file_path, "wb") as f:
        f.write(uploaded.getbuffer())

    try:
        with st.spinner("Extracting text…"):
            extracted = extract_text(file_path)
    except ExtractionError as e:
        st.error(str(e))
        st.stop()
    finally:
        os.remove(file_path)

    if not extracted.text.strip():
        st.warning("Couldn't extract any text from that file. Try a text-based PDF or a clearer image.")
        st.stop()

    engagement = analyze(extracted.text, extracted.content_type)
    result = engagement.to_dict()
    breakdown = score_breakdown(engagement.analysis)
    logger.info(
        "Processed %s (%s): %d words, score %d (%s)",
        uploaded.name, extracted.content_type, extracted.stats.words, engagement.score, engagement.grade,
    )

    # --- top metrics ---
    c1, c2, c3, c4, c5 = st.columns([1,1,1,1,1])
    c1.metric("Engagement", f"{engagement.score}/100")
    c2.metric("Grade", engagement.grade)
    c3.metric("Words", f"{extracted.stats.words:,}")
    c4.metric("Characters", f"{extracted.stats.characters:,}")
    if extracted.ocr is not None:
        c5.metric("OCR confidence", f"{extracted.ocr.confidence}%")
    else:
        c5.metric("Paragraphs", extracted.stats.paragraphs)

    st.subheader("Top suggestions")
    for s in engagement.suggestions[:3]:
        st.write(f"{s.icon} **{s.title}** ({s.priority}) – {s.description}. _e.g. {s.example}_")

    left, right = st.columns([1,1])
    with left:
        st.subheader("Score breakdown")
        df = pd.DataFrame(
            [{"dimension": k.replace("_", " "), "points": v} for k, v in breakdown.items()]
        )
        st.dataframe(df, hide_index=True, use_container_width=True)
        st.caption(f"Base score {BASE_SCORE}, clamped to 0–100.")

        a = engagement.analysis
        st.subheader("Quick analysis")
        st.markdown(f"""
- **Hashtags:** {a.hashtags.found} detected {" ".join(a.hashtags.list)}
- **Call-to-action:** {"present (" + a.call_to_action.strength + ")" if a.call_to_action.found else "none found"}
- **Length:** {a.length.characters} characters – {a.length.status.replace("_", " ")} for {a.length.platform} (optimal {a.length.optimal})
- **Readability:** {a.readability.score}/100, {a.readability.level.replace("_", " ")}
- **Tone:** {a.sentiment.tone}, {a.sentiment.engagement} engagement
""")
        with st.expander("Show full analysis"):
            st.json(result["analysis"])

    with right:
        st.subheader("Optimized version")
        st.text_area("Optimized content", engagement.optimized_content or "", height=220)

        if result["suggestions"]:
            with st.expander("All suggestions"):
                st.dataframe(
                    pd.DataFrame(list(result["suggestions"]))[["priority", "title", "description", "example"]],
                    hide_index=True,
                    use_container_width=True,
                )
        else:
            st.success("Nothing to improve. This post already covers every check.")

        with st.expander("Extracted text"):
            st.text(extracted.text)

    # --- downloads ---
    stem = os.path.splitext(uploaded.name)[0]
    meta = {"filename": uploaded.name, "content_type": extracted.content_type}
    pdf_bytes = build_pdf(result, meta, breakdown)

    st.download_button(
        "Download PDF report",
        data=pdf_bytes,
        file_name=f"engagement_report_{stem}.pdf",
        mime="application/pdf",
    )

    payload = {
        **extracted.to_dict(),
        "engagement": result,
        "original_filename": uploaded.name,
        "file_size": uploaded.size,
    }
    st.download_button(
        "Download JSON",
        data=json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8"),
        file_name=f"engagement_{stem}.json",
        mime="application/json",
    )

    st.download_button(
        "Download extracted text",
        data=extracted.text.encode("utf-8"),
        file_name=f"extracted_text_{extracted.content_type}_{stem}.txt",
        mime="text/plain",
    )
