"""
Localized prompt catalog for diary correction.

Every supported language is described by one LanguagePack holding all of the
strings the correction pipeline needs in that language:
- the system persona sent as the first chat message
- the correction instructions and the labels of the JSON format block
- the three-item correction taxonomy (grammar, spelling, expression)
- the names of every supported learning language, written in this language
- the placeholder correction shown when no API key is configured
- user-facing error messages

Lookups go through get_language_pack(), which owns the single fallback
rule: anything unrecognized resolves to the English pack. None of the
functions in this module raise.

Usage:
    from kodiary.prompts.catalog import get_language_pack, language_name

    pack = get_language_pack("ja")
    print(pack.type_labels)             # ('文法', 'スペル', '表現')
    print(language_name("ko", "fr"))    # 'coréen'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


# Supported codes, in the order the app lists them
SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "ko", "en", "ja", "es", "th", "de", "zh", "ar", "fr", "it", "pt", "hi",
)

DEFAULT_CORRECTION_LANGUAGE = "ko"
DEFAULT_EXPLANATION_LANGUAGE = "en"
FALLBACK_LANGUAGE = "en"

# Upper bound on corrections requested from the model (advisory only)
MAX_CORRECTIONS = 3


@dataclass(frozen=True)
class FieldLabels:
    """Sample values shown for each field of the JSON format block."""
    original: str
    corrected: str
    explanation: str


@dataclass(frozen=True)
class FallbackText:
    """Placeholder correction used when no API key is configured."""
    original: str
    corrected: str
    explanation: str


@dataclass(frozen=True)
class LanguagePack:
    """All localized strings for one explanation language.

    Attributes:
        code: ISO 639-1 code of the language
        native_name: Name of the language written in itself
        persona: System message describing the correcting tutor
        instructions: Template with {language} and {max_corrections} slots
        text_label: Heading placed before the quoted diary text
        format_intro: Sentence introducing the JSON format block
        field_labels: Sample values for original/corrected/explanation
        type_labels: Taxonomy labels ordered grammar, spelling, expression
        or_separator: Word joining the taxonomy labels, spaces included
        language_names: Learning-language code -> name in this language
        fallback: Strings for the no-credential placeholder correction
        error_messages: Error kind -> user-facing message
    """
    code: str
    native_name: str
    persona: str
    instructions: str
    text_label: str
    format_intro: str
    field_labels: FieldLabels
    type_labels: tuple[str, str, str]
    or_separator: str
    language_names: Mapping[str, str]
    fallback: FallbackText
    error_messages: Mapping[str, str] = field(default_factory=dict)


def _names(*names: str) -> Mapping[str, str]:
    """Pair language names with SUPPORTED_LANGUAGES, in order."""
    assert len(names) == len(SUPPORTED_LANGUAGES)
    return MappingProxyType(dict(zip(SUPPORTED_LANGUAGES, names)))


def _errors(
    empty_text: str,
    invalid_credential: str,
    invalid_response: str,
    http_error: str,
    empty_response: str,
    invalid_json: str,
) -> Mapping[str, str]:
    # http_error carries a {code} slot
    return MappingProxyType({
        "empty_text": empty_text,
        "invalid_credential": invalid_credential,
        "invalid_response": invalid_response,
        "http_error": http_error,
        "empty_response": empty_response,
        "invalid_json": invalid_json,
    })


_PACKS = (
    LanguagePack(
        code="ko",
        native_name="한국어",
        persona=(
            "당신은 외국어를 배우는 학습자를 위한 친절한 첨삭 선생님입니다.\n"
            "초급 학습자도 이해할 수 있도록 쉽고 친근하게 한국어로 설명해주세요.\n"
            "반드시 올바른 JSON 형식으로만 응답해주세요."
        ),
        instructions=(
            "다음 {language} 일기를 첨삭해주세요. "
            "가장 중요한 오류를 최대 {max_corrections}개까지만 골라 "
            "초급 학습자도 이해할 수 있게 친절하게 설명해주세요. "
            "설명은 한국어로 작성하고, JSON 외의 다른 텍스트는 쓰지 마세요."
        ),
        text_label="일기 내용:",
        format_intro="다음 JSON 형식으로만 응답해주세요:",
        field_labels=FieldLabels(
            original="틀린 표현",
            corrected="올바른 표현",
            explanation="초급자도 이해할 수 있는 친절한 설명",
        ),
        type_labels=("문법", "맞춤법", "표현"),
        or_separator=" 또는 ",
        language_names=_names(
            "한국어", "영어", "일본어", "스페인어", "태국어", "독일어",
            "중국어", "아랍어", "프랑스어", "이탈리아어", "포르투갈어", "힌디어",
        ),
        fallback=FallbackText(
            original="API 키 미설정",
            corrected="API 키를 설정해주세요",
            explanation="실제 첨삭을 받으려면 유효한 OpenAI API 키를 설정해야 해요. 지금은 예시 결과가 표시되고 있어요.",
        ),
        error_messages=_errors(
            empty_text="일기 내용을 입력해주세요.",
            invalid_credential="API 키 오류입니다. 잠시 후 다시 시도해주세요.",
            invalid_response="서버 응답 오류입니다.",
            http_error="서버 오류 (코드: {code})",
            empty_response="AI 응답을 받지 못했습니다.",
            invalid_json="AI 응답 처리 중 오류가 발생했습니다.",
        ),
    ),
    LanguagePack(
        code="en",
        native_name="English",
        persona=(
            "You are a kind writing tutor for people learning a foreign language.\n"
            "Explain your corrections simply and warmly in English so that beginners can follow them.\n"
            "Always respond with valid JSON only."
        ),
        instructions=(
            "Please correct the following diary entry written in {language}. "
            "Pick at most {max_corrections} of the most important mistakes "
            "and explain each one kindly so that a beginner can understand it. "
            "Write the explanations in English and do not output anything except JSON."
        ),
        text_label="Diary entry:",
        format_intro="Respond only in the following JSON format:",
        field_labels=FieldLabels(
            original="incorrect expression",
            corrected="correct expression",
            explanation="a friendly explanation a beginner can understand",
        ),
        type_labels=("Grammar", "Spelling", "Expression"),
        or_separator=" or ",
        language_names=_names(
            "Korean", "English", "Japanese", "Spanish", "Thai", "German",
            "Chinese", "Arabic", "French", "Italian", "Portuguese", "Hindi",
        ),
        fallback=FallbackText(
            original="API key not configured",
            corrected="Please configure an API key",
            explanation="A valid OpenAI API key is required to receive real corrections. This is sample output.",
        ),
        error_messages=_errors(
            empty_text="Please write something in your diary.",
            invalid_credential="There is a problem with the API key. Please try again later.",
            invalid_response="The server returned an invalid response.",
            http_error="Server error (code: {code})",
            empty_response="No response was received from the AI.",
            invalid_json="Something went wrong while reading the AI response.",
        ),
    ),
    LanguagePack(
        code="ja",
        native_name="日本語",
        persona=(
            "あなたは外国語を学ぶ人のための親切な添削の先生です。\n"
            "初心者にもわかるように、やさしく日本語で説明してください。\n"
            "必ず正しいJSON形式だけで回答してください。"
        ),
        instructions=(
            "次の{language}で書かれた日記を添削してください。"
            "最も重要な間違いを最大{max_corrections}個まで選び、"
            "初心者にもわかるように丁寧に説明してください。"
            "説明は日本語で書き、JSON以外は出力しないでください。"
        ),
        text_label="日記の内容:",
        format_intro="次のJSON形式だけで回答してください:",
        field_labels=FieldLabels(
            original="間違った表現",
            corrected="正しい表現",
            explanation="初心者にもわかる丁寧な説明",
        ),
        type_labels=("文法", "スペル", "表現"),
        or_separator=" または ",
        language_names=_names(
            "韓国語", "英語", "日本語", "スペイン語", "タイ語", "ドイツ語",
            "中国語", "アラビア語", "フランス語", "イタリア語", "ポルトガル語", "ヒンディー語",
        ),
        fallback=FallbackText(
            original="APIキー未設定",
            corrected="APIキーを設定してください",
            explanation="実際の添削を受けるには有効なOpenAI APIキーが必要です。現在はサンプル結果を表示しています。",
        ),
        error_messages=_errors(
            empty_text="日記の内容を入力してください。",
            invalid_credential="APIキーのエラーです。しばらくしてからもう一度お試しください。",
            invalid_response="サーバーの応答エラーです。",
            http_error="サーバーエラー (コード: {code})",
            empty_response="AIの応答を受け取れませんでした。",
            invalid_json="AIの応答の処理中にエラーが発生しました。",
        ),
    ),
    LanguagePack(
        code="es",
        native_name="Español",
        persona=(
            "Eres un profesor amable que corrige textos de personas que aprenden un idioma extranjero.\n"
            "Explica las correcciones en español de forma sencilla para que un principiante las entienda.\n"
            "Responde siempre únicamente con JSON válido."
        ),
        instructions=(
            "Corrige el siguiente diario escrito en {language}. "
            "Elige como máximo {max_corrections} de los errores más importantes "
            "y explica cada uno con amabilidad para que un principiante lo entienda. "
            "Escribe las explicaciones en español y no escribas nada fuera del JSON."
        ),
        text_label="Contenido del diario:",
        format_intro="Responde solo con el siguiente formato JSON:",
        field_labels=FieldLabels(
            original="expresión incorrecta",
            corrected="expresión correcta",
            explanation="una explicación amable que un principiante pueda entender",
        ),
        type_labels=("Gramática", "Ortografía", "Expresión"),
        or_separator=" o ",
        language_names=_names(
            "coreano", "inglés", "japonés", "español", "tailandés", "alemán",
            "chino", "árabe", "francés", "italiano", "portugués", "hindi",
        ),
        fallback=FallbackText(
            original="Clave de API no configurada",
            corrected="Configura una clave de API",
            explanation="Se necesita una clave de API de OpenAI válida para recibir correcciones reales. Este es un resultado de ejemplo.",
        ),
        error_messages=_errors(
            empty_text="Escribe algo en tu diario.",
            invalid_credential="Hay un problema con la clave de API. Inténtalo de nuevo más tarde.",
            invalid_response="El servidor devolvió una respuesta no válida.",
            http_error="Error del servidor (código: {code})",
            empty_response="No se recibió respuesta de la IA.",
            invalid_json="Se produjo un error al procesar la respuesta de la IA.",
        ),
    ),
    LanguagePack(
        code="th",
        native_name="ภาษาไทย",
        persona=(
            "คุณคือครูผู้ใจดีที่ช่วยตรวจแก้งานเขียนของผู้เรียนภาษาต่างประเทศ\n"
            "โปรดอธิบายเป็นภาษาไทยอย่างเรียบง่ายเพื่อให้ผู้เริ่มต้นเข้าใจได้\n"
            "ตอบกลับเป็นรูปแบบ JSON ที่ถูกต้องเท่านั้น"
        ),
        instructions=(
            "โปรดตรวจแก้บันทึกประจำวันต่อไปนี้ที่เขียนเป็น{language} "
            "เลือกข้อผิดพลาดที่สำคัญที่สุดไม่เกิน {max_corrections} จุด "
            "และอธิบายอย่างเป็นมิตรให้ผู้เริ่มต้นเข้าใจได้ "
            "เขียนคำอธิบายเป็นภาษาไทยและห้ามเขียนข้อความอื่นนอกจาก JSON"
        ),
        text_label="เนื้อหาบันทึก:",
        format_intro="โปรดตอบกลับในรูปแบบ JSON ต่อไปนี้เท่านั้น:",
        field_labels=FieldLabels(
            original="สำนวนที่ผิด",
            corrected="สำนวนที่ถูกต้อง",
            explanation="คำอธิบายที่เป็นมิตรซึ่งผู้เริ่มต้นเข้าใจได้",
        ),
        type_labels=("ไวยากรณ์", "การสะกด", "สำนวน"),
        or_separator=" หรือ ",
        language_names=_names(
            "ภาษาเกาหลี", "ภาษาอังกฤษ", "ภาษาญี่ปุ่น", "ภาษาสเปน", "ภาษาไทย", "ภาษาเยอรมัน",
            "ภาษาจีน", "ภาษาอาหรับ", "ภาษาฝรั่งเศส", "ภาษาอิตาลี", "ภาษาโปรตุเกส", "ภาษาฮินดี",
        ),
        fallback=FallbackText(
            original="ยังไม่ได้ตั้งค่าคีย์ API",
            corrected="โปรดตั้งค่าคีย์ API",
            explanation="ต้องใช้คีย์ OpenAI API ที่ถูกต้องเพื่อรับการตรวจแก้จริง ขณะนี้แสดงผลลัพธ์ตัวอย่าง",
        ),
        error_messages=_errors(
            empty_text="โปรดเขียนบันทึกของคุณ",
            invalid_credential="คีย์ API มีปัญหา โปรดลองใหม่อีกครั้งภายหลัง",
            invalid_response="เซิร์ฟเวอร์ตอบกลับไม่ถูกต้อง",
            http_error="เซิร์ฟเวอร์ขัดข้อง (รหัส: {code})",
            empty_response="ไม่ได้รับคำตอบจาก AI",
            invalid_json="เกิดข้อผิดพลาดขณะประมวลผลคำตอบของ AI",
        ),
    ),
    LanguagePack(
        code="de",
        native_name="Deutsch",
        persona=(
            "Du bist eine freundliche Lehrkraft, die Texte von Fremdsprachenlernenden korrigiert.\n"
            "Erkläre die Korrekturen einfach und verständlich auf Deutsch, damit auch Anfänger sie verstehen.\n"
            "Antworte immer ausschließlich mit gültigem JSON."
        ),
        instructions=(
            "Bitte korrigiere den folgenden Tagebucheintrag auf {language}. "
            "Wähle höchstens {max_corrections} der wichtigsten Fehler aus "
            "und erkläre jeden freundlich, sodass ein Anfänger ihn versteht. "
            "Schreibe die Erklärungen auf Deutsch und gib nichts außer JSON aus."
        ),
        text_label="Tagebucheintrag:",
        format_intro="Antworte nur im folgenden JSON-Format:",
        field_labels=FieldLabels(
            original="falscher Ausdruck",
            corrected="richtiger Ausdruck",
            explanation="eine freundliche Erklärung, die Anfänger verstehen",
        ),
        type_labels=("Grammatik", "Rechtschreibung", "Ausdruck"),
        or_separator=" oder ",
        language_names=_names(
            "Koreanisch", "Englisch", "Japanisch", "Spanisch", "Thailändisch", "Deutsch",
            "Chinesisch", "Arabisch", "Französisch", "Italienisch", "Portugiesisch", "Hindi",
        ),
        fallback=FallbackText(
            original="API-Schlüssel nicht eingerichtet",
            corrected="Bitte richte einen API-Schlüssel ein",
            explanation="Für echte Korrekturen wird ein gültiger OpenAI-API-Schlüssel benötigt. Dies ist ein Beispielergebnis.",
        ),
        error_messages=_errors(
            empty_text="Bitte schreibe etwas in dein Tagebuch.",
            invalid_credential="Es gibt ein Problem mit dem API-Schlüssel. Bitte versuche es später erneut.",
            invalid_response="Der Server hat eine ungültige Antwort geliefert.",
            http_error="Serverfehler (Code: {code})",
            empty_response="Von der KI kam keine Antwort.",
            invalid_json="Beim Verarbeiten der KI-Antwort ist ein Fehler aufgetreten.",
        ),
    ),
    LanguagePack(
        code="zh",
        native_name="中文",
        persona=(
            "你是一位为外语学习者批改作文的亲切老师。\n"
            "请用中文简单易懂地解释，让初学者也能理解。\n"
            "请务必只用正确的JSON格式回答。"
        ),
        instructions=(
            "请批改下面这篇用{language}写的日记。"
            "最多挑出{max_corrections}个最重要的错误，"
            "并亲切地解释，让初学者也能理解。"
            "解释请用中文书写，除JSON外不要输出任何内容。"
        ),
        text_label="日记内容：",
        format_intro="请只用以下JSON格式回答：",
        field_labels=FieldLabels(
            original="错误的表达",
            corrected="正确的表达",
            explanation="初学者也能理解的亲切说明",
        ),
        type_labels=("语法", "拼写", "表达"),
        or_separator=" 或 ",
        language_names=_names(
            "韩语", "英语", "日语", "西班牙语", "泰语", "德语",
            "中文", "阿拉伯语", "法语", "意大利语", "葡萄牙语", "印地语",
        ),
        fallback=FallbackText(
            original="未设置API密钥",
            corrected="请设置API密钥",
            explanation="需要有效的OpenAI API密钥才能获得真正的批改。当前显示的是示例结果。",
        ),
        error_messages=_errors(
            empty_text="请输入日记内容。",
            invalid_credential="API密钥有误，请稍后再试。",
            invalid_response="服务器响应错误。",
            http_error="服务器错误（代码：{code}）",
            empty_response="未收到AI的回复。",
            invalid_json="处理AI回复时出错。",
        ),
    ),
    LanguagePack(
        code="ar",
        native_name="العربية",
        persona=(
            "أنت معلم لطيف يصحح كتابات متعلمي اللغات الأجنبية.\n"
            "اشرح التصحيحات باللغة العربية بأسلوب بسيط يفهمه المبتدئون.\n"
            "أجب دائمًا بصيغة JSON صحيحة فقط."
        ),
        instructions=(
            "يرجى تصحيح اليوميات التالية المكتوبة باللغة {language}. "
            "اختر {max_corrections} أخطاء على الأكثر من أهم الأخطاء "
            "واشرح كل خطأ بلطف حتى يفهمه المبتدئ. "
            "اكتب الشروحات باللغة العربية ولا تكتب أي شيء غير JSON."
        ),
        text_label="نص اليوميات:",
        format_intro="أجب فقط بصيغة JSON التالية:",
        field_labels=FieldLabels(
            original="التعبير الخاطئ",
            corrected="التعبير الصحيح",
            explanation="شرح لطيف يفهمه المبتدئ",
        ),
        type_labels=("القواعد", "الإملاء", "التعبير"),
        or_separator=" أو ",
        language_names=_names(
            "الكورية", "الإنجليزية", "اليابانية", "الإسبانية", "التايلاندية", "الألمانية",
            "الصينية", "العربية", "الفرنسية", "الإيطالية", "البرتغالية", "الهندية",
        ),
        fallback=FallbackText(
            original="لم يتم إعداد مفتاح API",
            corrected="يرجى إعداد مفتاح API",
            explanation="يلزم مفتاح OpenAI API صالح للحصول على تصحيحات حقيقية. هذه نتيجة تجريبية.",
        ),
        error_messages=_errors(
            empty_text="يرجى كتابة شيء في يومياتك.",
            invalid_credential="هناك مشكلة في مفتاح API. يرجى المحاولة لاحقًا.",
            invalid_response="أعاد الخادم استجابة غير صالحة.",
            http_error="خطأ في الخادم (الرمز: {code})",
            empty_response="لم يتم استلام رد من الذكاء الاصطناعي.",
            invalid_json="حدث خطأ أثناء معالجة رد الذكاء الاصطناعي.",
        ),
    ),
    LanguagePack(
        code="fr",
        native_name="Français",
        persona=(
            "Tu es un professeur bienveillant qui corrige les textes des apprenants en langue étrangère.\n"
            "Explique les corrections en français, simplement, pour qu'un débutant puisse les comprendre.\n"
            "Réponds toujours uniquement avec du JSON valide."
        ),
        instructions=(
            "Corrige le journal suivant écrit en {language}. "
            "Choisis au maximum {max_corrections} des erreurs les plus importantes "
            "et explique chacune avec bienveillance pour qu'un débutant la comprenne. "
            "Rédige les explications en français et n'écris rien d'autre que du JSON."
        ),
        text_label="Contenu du journal :",
        format_intro="Réponds uniquement au format JSON suivant :",
        field_labels=FieldLabels(
            original="expression incorrecte",
            corrected="expression correcte",
            explanation="une explication bienveillante qu'un débutant peut comprendre",
        ),
        type_labels=("Grammaire", "Orthographe", "Expression"),
        or_separator=" ou ",
        language_names=_names(
            "coréen", "anglais", "japonais", "espagnol", "thaï", "allemand",
            "chinois", "arabe", "français", "italien", "portugais", "hindi",
        ),
        fallback=FallbackText(
            original="Clé API non configurée",
            corrected="Veuillez configurer une clé API",
            explanation="Une clé API OpenAI valide est nécessaire pour recevoir de vraies corrections. Ceci est un exemple de résultat.",
        ),
        error_messages=_errors(
            empty_text="Écris quelque chose dans ton journal.",
            invalid_credential="Il y a un problème avec la clé API. Réessaie plus tard.",
            invalid_response="Le serveur a renvoyé une réponse invalide.",
            http_error="Erreur du serveur (code : {code})",
            empty_response="Aucune réponse n'a été reçue de l'IA.",
            invalid_json="Une erreur est survenue lors du traitement de la réponse de l'IA.",
        ),
    ),
    LanguagePack(
        code="it",
        native_name="Italiano",
        persona=(
            "Sei un insegnante gentile che corregge i testi di chi studia una lingua straniera.\n"
            "Spiega le correzioni in italiano in modo semplice, così che anche un principiante possa capirle.\n"
            "Rispondi sempre solo con JSON valido."
        ),
        instructions=(
            "Correggi il seguente diario scritto in {language}. "
            "Scegli al massimo {max_corrections} degli errori più importanti "
            "e spiega ciascuno con gentilezza perché un principiante lo capisca. "
            "Scrivi le spiegazioni in italiano e non scrivere nulla oltre al JSON."
        ),
        text_label="Contenuto del diario:",
        format_intro="Rispondi solo nel seguente formato JSON:",
        field_labels=FieldLabels(
            original="espressione errata",
            corrected="espressione corretta",
            explanation="una spiegazione gentile comprensibile a un principiante",
        ),
        type_labels=("Grammatica", "Ortografia", "Espressione"),
        or_separator=" o ",
        language_names=_names(
            "coreano", "inglese", "giapponese", "spagnolo", "thailandese", "tedesco",
            "cinese", "arabo", "francese", "italiano", "portoghese", "hindi",
        ),
        fallback=FallbackText(
            original="Chiave API non configurata",
            corrected="Configura una chiave API",
            explanation="Per ricevere correzioni reali serve una chiave API OpenAI valida. Questo è un risultato di esempio.",
        ),
        error_messages=_errors(
            empty_text="Scrivi qualcosa nel tuo diario.",
            invalid_credential="C'è un problema con la chiave API. Riprova più tardi.",
            invalid_response="Il server ha restituito una risposta non valida.",
            http_error="Errore del server (codice: {code})",
            empty_response="Nessuna risposta ricevuta dall'IA.",
            invalid_json="Si è verificato un errore durante l'elaborazione della risposta dell'IA.",
        ),
    ),
    LanguagePack(
        code="pt",
        native_name="Português",
        persona=(
            "Você é um professor gentil que corrige textos de quem aprende um idioma estrangeiro.\n"
            "Explique as correções em português de forma simples, para que um iniciante consiga entender.\n"
            "Responda sempre apenas com JSON válido."
        ),
        instructions=(
            "Corrija o seguinte diário escrito em {language}. "
            "Escolha no máximo {max_corrections} dos erros mais importantes "
            "e explique cada um com gentileza para que um iniciante entenda. "
            "Escreva as explicações em português e não escreva nada além do JSON."
        ),
        text_label="Conteúdo do diário:",
        format_intro="Responda apenas no seguinte formato JSON:",
        field_labels=FieldLabels(
            original="expressão incorreta",
            corrected="expressão correta",
            explanation="uma explicação gentil que um iniciante consiga entender",
        ),
        type_labels=("Gramática", "Ortografia", "Expressão"),
        or_separator=" ou ",
        language_names=_names(
            "coreano", "inglês", "japonês", "espanhol", "tailandês", "alemão",
            "chinês", "árabe", "francês", "italiano", "português", "hindi",
        ),
        fallback=FallbackText(
            original="Chave de API não configurada",
            corrected="Configure uma chave de API",
            explanation="É necessária uma chave de API da OpenAI válida para receber correções reais. Este é um resultado de exemplo.",
        ),
        error_messages=_errors(
            empty_text="Escreva algo no seu diário.",
            invalid_credential="Há um problema com a chave de API. Tente novamente mais tarde.",
            invalid_response="O servidor retornou uma resposta inválida.",
            http_error="Erro do servidor (código: {code})",
            empty_response="Nenhuma resposta foi recebida da IA.",
            invalid_json="Ocorreu um erro ao processar a resposta da IA.",
        ),
    ),
    LanguagePack(
        code="hi",
        native_name="हिन्दी",
        persona=(
            "आप विदेशी भाषा सीखने वालों के लेखन को सुधारने वाले एक दयालु शिक्षक हैं।\n"
            "सुधारों को हिंदी में सरल तरीके से समझाइए ताकि शुरुआती भी समझ सकें।\n"
            "हमेशा केवल मान्य JSON में उत्तर दीजिए।"
        ),
        instructions=(
            "कृपया {language} में लिखी गई निम्नलिखित डायरी को सुधारिए। "
            "सबसे महत्वपूर्ण अधिकतम {max_corrections} गलतियाँ चुनिए "
            "और हर एक को इस तरह समझाइए कि शुरुआती भी समझ सकें। "
            "व्याख्या हिंदी में लिखिए और JSON के अलावा कुछ भी न लिखिए।"
        ),
        text_label="डायरी की सामग्री:",
        format_intro="केवल निम्नलिखित JSON प्रारूप में उत्तर दीजिए:",
        field_labels=FieldLabels(
            original="गलत अभिव्यक्ति",
            corrected="सही अभिव्यक्ति",
            explanation="शुरुआती के समझने योग्य सरल व्याख्या",
        ),
        type_labels=("व्याकरण", "वर्तनी", "अभिव्यक्ति"),
        or_separator=" या ",
        language_names=_names(
            "कोरियाई", "अंग्रेज़ी", "जापानी", "स्पेनिश", "थाई", "जर्मन",
            "चीनी", "अरबी", "फ़्रेंच", "इतालवी", "पुर्तगाली", "हिंदी",
        ),
        fallback=FallbackText(
            original="API कुंजी सेट नहीं है",
            corrected="कृपया API कुंजी सेट करें",
            explanation="असली सुधार पाने के लिए मान्य OpenAI API कुंजी चाहिए। यह एक उदाहरण परिणाम है।",
        ),
        error_messages=_errors(
            empty_text="कृपया अपनी डायरी में कुछ लिखें।",
            invalid_credential="API कुंजी में समस्या है। कृपया बाद में फिर से प्रयास करें।",
            invalid_response="सर्वर ने अमान्य प्रतिक्रिया दी।",
            http_error="सर्वर त्रुटि (कोड: {code})",
            empty_response="AI से कोई उत्तर नहीं मिला।",
            invalid_json="AI के उत्तर को संसाधित करते समय त्रुटि हुई।",
        ),
    ),
)

LANGUAGE_PACKS: Mapping[str, LanguagePack] = MappingProxyType(
    {pack.code: pack for pack in _PACKS}
)


def normalize_language_code(code: Optional[str]) -> str:
    """Reduce codes like 'pt-BR', 'zh_Hans' or ' KO ' to their base form."""
    if not code:
        return ""
    return code.strip().replace("_", "-").split("-")[0].lower()


def is_supported_language(code: Optional[str]) -> bool:
    return normalize_language_code(code) in LANGUAGE_PACKS


def get_language_pack(code: Optional[str]) -> LanguagePack:
    """Return the pack for a language code, or the English pack if unknown."""
    return LANGUAGE_PACKS.get(
        normalize_language_code(code),
        LANGUAGE_PACKS[FALLBACK_LANGUAGE],
    )


def system_persona(explanation_language: Optional[str]) -> str:
    return get_language_pack(explanation_language).persona


def language_name(learning_language: str, explanation_language: Optional[str]) -> str:
    """Name of the learning language, written in the explanation language.

    An unrecognized learning language is returned unchanged.
    """
    pack = get_language_pack(explanation_language)
    return pack.language_names.get(
        normalize_language_code(learning_language),
        learning_language,
    )


def correction_instructions(
    correction_language: str,
    explanation_language: Optional[str],
    max_corrections: int = MAX_CORRECTIONS,
) -> str:
    pack = get_language_pack(explanation_language)
    return pack.instructions.format(
        language=language_name(correction_language, explanation_language),
        max_corrections=max_corrections,
    )


def field_labels(explanation_language: Optional[str]) -> FieldLabels:
    return get_language_pack(explanation_language).field_labels


def type_labels(explanation_language: Optional[str]) -> tuple[str, str, str]:
    return get_language_pack(explanation_language).type_labels


def or_separator(explanation_language: Optional[str]) -> str:
    return get_language_pack(explanation_language).or_separator


def fallback_message(explanation_language: Optional[str]) -> FallbackText:
    """Strings shown in place of corrections when no API key is configured."""
    return get_language_pack(explanation_language).fallback


class _BlankMissing(dict):
    def __missing__(self, key):
        return ""


def error_message(kind: str, explanation_language: Optional[str], **params) -> str:
    """User-facing message for an error kind, in the given language.

    Placeholders without a matching keyword render as empty strings.
    """
    messages = get_language_pack(explanation_language).error_messages
    template = messages.get(kind) or LANGUAGE_PACKS[FALLBACK_LANGUAGE].error_messages.get(kind)
    if not template:
        return kind
    return template.format_map(_BlankMissing(params))
